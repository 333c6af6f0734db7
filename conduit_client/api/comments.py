"""Comment endpoints."""

from typing import List
from urllib.parse import quote

from conduit_client.api.decoding import decodes_response
from conduit_client.protocols import Comment, TransportProtocol


class CommentsApi:
    def __init__(self, transport: TransportProtocol):
        self._transport = transport

    @decodes_response
    async def get_all(self, slug: str) -> List[Comment]:
        data = await self._transport.request("GET", f"/articles/{quote(slug)}/comments")
        return [Comment.from_wire(c) for c in data.get("comments") or []]

    @decodes_response
    async def add(self, slug: str, body: str) -> Comment:
        data = await self._transport.request(
            "POST", f"/articles/{quote(slug)}/comments",
            json={"comment": {"body": body}},
        )
        return Comment.from_wire(data["comment"])

    async def delete(self, slug: str, comment_id: str) -> None:
        await self._transport.request("DELETE", f"/articles/{quote(slug)}/comments/{quote(str(comment_id))}")
