"""Exception hierarchy for the Conduit client.

    ConduitClientError
    ├── ApiError                 non-2xx response
    │   ├── ValidationFailed     422, carries the field -> messages ErrorSet
    │   ├── AuthorizationError   401 / 403
    │   └── NotFoundError        404
    ├── TransportError           network failure (wraps httpx.RequestError)
    └── ResponseFormatError      2xx reply whose body does not decode
"""

from typing import Any, List, Mapping, Optional

from conduit_client.protocols import ErrorSet


class ConduitClientError(Exception):
    """Base exception for client errors."""
    pass


class ApiError(ConduitClientError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, errors: Optional[ErrorSet] = None, message: str = ""):
        self.status = status
        self.errors: ErrorSet = errors or {}
        super().__init__(message or f"API error {status}: {format_errors(self.errors) or 'no details'}")


class ValidationFailed(ApiError):
    """Structured field validation feedback from a failed write."""
    pass


class AuthorizationError(ApiError):
    """Session invalid or expired, or action not permitted."""
    pass


class NotFoundError(ApiError):
    pass


class TransportError(ConduitClientError):
    """The request never produced a response."""
    pass


class ResponseFormatError(ConduitClientError):
    """The API answered 2xx with a body the client cannot decode."""
    pass


def normalize_errors(raw: Any) -> ErrorSet:
    """Coerce an API ``errors`` object into an ErrorSet.

    The API sends ``{"field": ["msg", ...]}`` but some servers send a bare
    string per field.
    """
    if not isinstance(raw, Mapping):
        return {}
    normalized: ErrorSet = {}
    for key, value in raw.items():
        if isinstance(value, (list, tuple)):
            normalized[str(key)] = [str(v) for v in value]
        else:
            normalized[str(key)] = [str(value)]
    return normalized


def format_errors(errors: Optional[ErrorSet]) -> List[str]:
    """Render an ErrorSet as display lines ("email is invalid")."""
    if not errors:
        return []
    return [f"{field} {', '.join(messages)}" for field, messages in errors.items()]


def error_for_status(status: int, errors: Optional[ErrorSet] = None) -> ApiError:
    """Pick the ApiError subclass for a response status."""
    if status in (401, 403):
        return AuthorizationError(status, errors)
    if status == 404:
        return NotFoundError(status, errors)
    if status == 422 or errors:
        return ValidationFailed(status, errors)
    return ApiError(status, errors)


__all__ = [
    "ConduitClientError",
    "ApiError",
    "ValidationFailed",
    "AuthorizationError",
    "NotFoundError",
    "TransportError",
    "ResponseFormatError",
    "normalize_errors",
    "format_errors",
    "error_for_status",
]
