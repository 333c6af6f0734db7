"""Protocol definitions - interfaces for dependency injection.

These are typing.Protocol classes for static type checking. Concrete
implementations live in conduit_client.storage, conduit_client.transport
and conduit_client.navigation; tests substitute fakes.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


# =============================================================================
# LOGGING
# =============================================================================

@runtime_checkable
class LoggerProtocol(Protocol):
    """Structured logging interface."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def bind(self, **kwargs: Any) -> "LoggerProtocol": ...


# =============================================================================
# KEY-VALUE STORAGE
# =============================================================================

@runtime_checkable
class KeyValueStoreProtocol(Protocol):
    """Persistent string storage.

    Only the session store reads or writes through this capability.
    Removing an absent key must succeed silently.
    """

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


# =============================================================================
# TRANSPORT
# =============================================================================

@runtime_checkable
class TransportProtocol(Protocol):
    """Request/response function against the Conduit REST API.

    Returns the decoded JSON body (an empty dict for empty bodies).
    Raises ApiError subclasses for non-2xx responses and TransportError
    for network failures.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]: ...


# =============================================================================
# NAVIGATION
# =============================================================================

@runtime_checkable
class NavigatorProtocol(Protocol):
    """Navigation side effect (route change)."""

    def navigate(self, path: str) -> None: ...
