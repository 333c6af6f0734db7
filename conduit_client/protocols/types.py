"""Core types for the Conduit client.

Entities are frozen dataclasses: every update produces a new value, so
subscribers can compare snapshots by equality. Wire payloads use the API's
camelCase keys; ``from_wire`` is the only place that knows about them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


ErrorSet = Dict[str, List[str]]
FilterValue = Union[str, int]


# =============================================================================
# ENUMS
# =============================================================================

class SelectionType(str, Enum):
    """Which article collection a list query selects."""
    ALL = "all"
    FEED = "feed"
    BY_TAG = "by_tag"
    BY_AUTHOR = "by_author"
    FAVORITED_BY = "favorited_by"


# Filter key each narrowed selection type requires
REQUIRED_FILTER: Dict[SelectionType, str] = {
    SelectionType.BY_TAG: "tag",
    SelectionType.BY_AUTHOR: "author",
    SelectionType.FAVORITED_BY: "favorited",
}

# Computed by the query engine from the page size, never set by callers
RESERVED_FILTERS = frozenset({"limit", "offset"})


class LoadingState(str, Enum):
    """Lifecycle of a list fetch cycle."""
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


# =============================================================================
# ENTITIES
# =============================================================================

@dataclass(frozen=True)
class Identity:
    """The authenticated user."""
    username: str
    email: str
    token: str
    bio: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Identity":
        return cls(
            username=data["username"],
            email=data["email"],
            token=data.get("token") or "",
            bio=data.get("bio"),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class Profile:
    """Public view of a user."""
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None
    following: bool = False

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Profile":
        return cls(
            username=data["username"],
            bio=data.get("bio"),
            image=data.get("image"),
            following=bool(data.get("following", False)),
        )


@dataclass(frozen=True)
class Article:
    slug: str
    title: str
    description: str
    body: str
    author: Profile
    tag_list: Tuple[str, ...] = ()
    created_at: str = ""
    updated_at: str = ""
    favorited: bool = False
    favorites_count: int = 0

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Article":
        return cls(
            slug=data["slug"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            body=data.get("body", ""),
            author=Profile.from_wire(data["author"]),
            tag_list=tuple(data.get("tagList") or ()),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
            favorited=bool(data.get("favorited", False)),
            favorites_count=int(data.get("favoritesCount", 0)),
        )


@dataclass(frozen=True)
class Comment:
    id: str
    body: str
    author: Profile
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Comment":
        return cls(
            # The API sends integer ids; keys are compared as strings
            id=str(data["id"]),
            body=data.get("body", ""),
            author=Profile.from_wire(data["author"]),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


@dataclass(frozen=True)
class ListResult:
    """One page of a list query."""
    items: Tuple[Article, ...]
    total_count: int

    def __post_init__(self):
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")


# =============================================================================
# QUERY DESCRIPTOR
# =============================================================================

@dataclass(frozen=True)
class QueryDescriptor:
    """Selection type, filters and page number driving a list fetch.

    Immutable: use ``with_page`` or ``with_selection`` to derive the next
    descriptor. Changing the selection always lands on page 1.
    """
    selection_type: SelectionType = SelectionType.ALL
    filters: Dict[str, FilterValue] = field(default_factory=dict)
    page: int = 1

    def __post_init__(self):
        if not isinstance(self.page, int) or self.page < 1:
            raise ValueError(f"page must be an integer >= 1, got {self.page!r}")
        reserved = RESERVED_FILTERS.intersection(self.filters)
        if reserved:
            raise ValueError(f"Reserved filter keys: {sorted(reserved)}")
        required = REQUIRED_FILTER.get(self.selection_type)
        if required and not self.filters.get(required):
            raise ValueError(
                f"Selection {self.selection_type.value!r} requires filter {required!r}"
            )

    def with_page(self, page: int) -> "QueryDescriptor":
        return replace(self, page=page)

    def with_selection(
        self,
        selection_type: SelectionType,
        filters: Optional[Mapping[str, FilterValue]] = None,
    ) -> "QueryDescriptor":
        return QueryDescriptor(
            selection_type=selection_type,
            filters=dict(filters or {}),
            page=1,
        )


__all__ = [
    "ErrorSet",
    "FilterValue",
    "SelectionType",
    "REQUIRED_FILTER",
    "RESERVED_FILTERS",
    "LoadingState",
    "Identity",
    "Profile",
    "Article",
    "Comment",
    "ListResult",
    "QueryDescriptor",
]
