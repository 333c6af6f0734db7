"""Article endpoints."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from conduit_client.api.decoding import decodes_response
from conduit_client.protocols import (
    Article,
    ListResult,
    QueryDescriptor,
    SelectionType,
    TransportProtocol,
)


@dataclass
class ArticleDraft:
    """Editable article fields as submitted by the editor."""
    title: str = ""
    description: str = ""
    body: str = ""
    tag_list: List[str] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "body": self.body,
            "tagList": list(self.tag_list),
        }


class ArticlesApi:
    def __init__(self, transport: TransportProtocol):
        self._transport = transport

    @decodes_response
    async def query(
        self,
        descriptor: QueryDescriptor,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ListResult:
        """Fetch one page of the collection a descriptor selects."""
        path = "/articles/feed" if descriptor.selection_type is SelectionType.FEED else "/articles"
        params: Dict[str, Any] = dict(descriptor.filters)
        params["limit"] = limit
        params["offset"] = offset
        data = await self._transport.request("GET", path, params=params)
        return ListResult(
            items=tuple(Article.from_wire(a) for a in data.get("articles") or []),
            total_count=int(data.get("articlesCount", 0)),
        )

    @decodes_response
    async def get(self, slug: str) -> Article:
        data = await self._transport.request("GET", f"/articles/{quote(slug)}")
        return Article.from_wire(data["article"])

    @decodes_response
    async def create(self, draft: ArticleDraft) -> Article:
        data = await self._transport.request("POST", "/articles", json={"article": draft.to_wire()})
        return Article.from_wire(data["article"])

    @decodes_response
    async def update(self, slug: str, draft: ArticleDraft) -> Article:
        data = await self._transport.request(
            "PUT", f"/articles/{quote(slug)}", json={"article": draft.to_wire()}
        )
        return Article.from_wire(data["article"])

    async def delete(self, slug: str) -> None:
        await self._transport.request("DELETE", f"/articles/{quote(slug)}")

    @decodes_response
    async def favorite(self, slug: str) -> Article:
        data = await self._transport.request("POST", f"/articles/{quote(slug)}/favorite")
        return Article.from_wire(data["article"])

    @decodes_response
    async def unfavorite(self, slug: str) -> Article:
        data = await self._transport.request("DELETE", f"/articles/{quote(slug)}/favorite")
        return Article.from_wire(data["article"])
