"""User endpoints: authentication and the current user."""

from typing import Any, Dict, Mapping

from conduit_client.api.decoding import decodes_response
from conduit_client.protocols import Identity, TransportProtocol


class UsersApi:
    def __init__(self, transport: TransportProtocol):
        self._transport = transport

    @decodes_response
    async def login(self, email: str, password: str) -> Identity:
        data = await self._transport.request(
            "POST", "/users/login",
            json={"user": {"email": email, "password": password}},
        )
        return Identity.from_wire(data["user"])

    @decodes_response
    async def register(self, username: str, email: str, password: str) -> Identity:
        data = await self._transport.request(
            "POST", "/users",
            json={"user": {"username": username, "email": email, "password": password}},
        )
        return Identity.from_wire(data["user"])

    @decodes_response
    async def current(self) -> Identity:
        data = await self._transport.request("GET", "/user")
        return Identity.from_wire(data["user"])

    @decodes_response
    async def update(self, changes: Mapping[str, Any]) -> Identity:
        """Send a partial user update.

        Unset (None) fields are not sent. A blank password means "keep the
        current one"; other fields may be cleared with an empty string.
        """
        payload: Dict[str, Any] = {k: v for k, v in changes.items() if v is not None}
        if payload.get("password") == "":
            del payload["password"]
        data = await self._transport.request("PUT", "/user", json={"user": payload})
        return Identity.from_wire(data["user"])
