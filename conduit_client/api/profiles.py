"""Profile endpoints."""

from urllib.parse import quote

from conduit_client.api.decoding import decodes_response
from conduit_client.protocols import Profile, TransportProtocol


class ProfilesApi:
    def __init__(self, transport: TransportProtocol):
        self._transport = transport

    @decodes_response
    async def get(self, username: str) -> Profile:
        data = await self._transport.request("GET", f"/profiles/{quote(username)}")
        return Profile.from_wire(data["profile"])

    @decodes_response
    async def follow(self, username: str) -> Profile:
        data = await self._transport.request("POST", f"/profiles/{quote(username)}/follow")
        return Profile.from_wire(data["profile"])

    @decodes_response
    async def unfollow(self, username: str) -> Profile:
        data = await self._transport.request("DELETE", f"/profiles/{quote(username)}/follow")
        return Profile.from_wire(data["profile"])
