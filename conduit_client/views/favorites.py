"""Favorite buttons for the articles of a list."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from conduit_client.actions import ConduitActions
from conduit_client.mutations import Mutation
from conduit_client.protocols import Article, LoggerProtocol
from conduit_client.query import ArticleListQuery
from conduit_client.utils.logging import get_component_logger


class ListFavorites:
    """One favorite button per listed article.

    Each slug gets its own favorite/unfavorite pair with a shared guard,
    so a click on one article never blocks another. A successful toggle
    patches the article in the list in place.

    Usage:
        favorites = ListFavorites(actions, query)
        await favorites.toggle("how-to-train-your-dragon")
    """

    def __init__(
        self,
        actions: ConduitActions,
        query: ArticleListQuery,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._actions = actions
        self._query = query
        self._logger = get_component_logger("ListFavorites", logger)
        self._buttons: Dict[str, Tuple[Mutation[Article], Mutation[Article]]] = {}

    def button(self, slug: str) -> Tuple[Mutation[Article], Mutation[Article]]:
        """The (favorite, unfavorite) pair for ``slug``."""
        if slug not in self._buttons:
            self._buttons[slug] = (
                self._actions.favorite(self._query),
                self._actions.unfavorite(self._query),
            )
        return self._buttons[slug]

    def in_flight(self, slug: str) -> bool:
        return any(m.in_flight for m in self._buttons.get(slug, ()))

    async def toggle(self, slug: str) -> Optional[Article]:
        """Flip the favorite flag of the listed article ``slug``."""
        article = next((a for a in self._query.results.value if a.slug == slug), None)
        if article is None:
            self._logger.debug("favorite_target_not_listed", slug=slug)
            return None
        if self.in_flight(slug):
            self._logger.debug("favorite_ignored_in_flight", slug=slug)
            return None
        favorite, unfavorite = self.button(slug)
        action = unfavorite if article.favorited else favorite
        return await action.invoke(slug)

    def clear(self) -> None:
        self._buttons.clear()


__all__ = ["ListFavorites"]
