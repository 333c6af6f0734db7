"""Typed clients for the Conduit REST endpoints.

Each client is a thin mapping from method calls to transport requests and
from wire payloads to entities; none of them hold state.
"""

from conduit_client.api.articles import ArticleDraft, ArticlesApi
from conduit_client.api.comments import CommentsApi
from conduit_client.api.profiles import ProfilesApi
from conduit_client.api.tags import TagsApi
from conduit_client.api.users import UsersApi

__all__ = [
    "ArticleDraft",
    "ArticlesApi",
    "CommentsApi",
    "ProfilesApi",
    "TagsApi",
    "UsersApi",
]
