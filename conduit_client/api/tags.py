"""Tag endpoint."""

from typing import List

from conduit_client.api.decoding import decodes_response
from conduit_client.protocols import TransportProtocol


class TagsApi:
    def __init__(self, transport: TransportProtocol):
        self._transport = transport

    @decodes_response
    async def get_all(self) -> List[str]:
        data = await self._transport.request("GET", "/tags")
        return list(data.get("tags") or [])
