"""HTTP transport for the Conduit REST API.

Thin adapter over httpx.AsyncClient:
- joins paths onto the configured API base URL
- attaches ``Authorization: Token <jwt>`` when a session token exists
- maps non-2xx responses onto the ApiError hierarchy
- wraps network failures in TransportError

No retries: every recovery is user-initiated.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from conduit_client.errors import (
    ResponseFormatError,
    TransportError,
    error_for_status,
    normalize_errors,
)
from conduit_client.protocols import LoggerProtocol
from conduit_client.utils.logging import get_component_logger

TokenProvider = Callable[[], Optional[str]]


class HttpTransport:
    """TransportProtocol implementation backed by httpx.

    Usage:
        transport = HttpTransport("https://api.realworld.show/api", token_provider=session.get_token)
        data = await transport.request("GET", "/articles", params={"limit": 10})
        await transport.aclose()
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._logger = get_component_logger("HttpTransport", logger)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one request and decode the JSON body."""
        headers = self._build_headers()
        query = {k: v for k, v in (params or {}).items() if v is not None}

        self._logger.debug("http_request", method=method, path=path, params=query or None)

        try:
            response = await self._client.request(
                method,
                path,
                params=query or None,
                json=json,
                headers=headers,
            )
        except httpx.RequestError as e:
            self._logger.error(
                "http_connection_error",
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            error = error_for_status(response.status_code, self._extract_errors(response))
            self._logger.warning(
                "http_error_response",
                method=method,
                path=path,
                status=response.status_code,
            )
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            self._logger.warning("http_malformed_body", method=method, path=path)
            raise ResponseFormatError(f"{method} {path} returned a non-JSON body") from e

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Token {token}"
        return headers

    @staticmethod
    def _extract_errors(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        if isinstance(body, dict):
            return normalize_errors(body.get("errors"))
        return {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def __repr__(self) -> str:
        return f"HttpTransport(base_url={self._base_url})"


__all__ = ["HttpTransport", "TokenProvider"]
