"""Home page: global feed, personal feed and tag filtering."""

from __future__ import annotations

import asyncio
from typing import Mapping, Optional

from conduit_client.actions import ConduitActions
from conduit_client.protocols import Article, FilterValue, LoggerProtocol, SelectionType
from conduit_client.query import ArticleListQuery
from conduit_client.session import SessionStore
from conduit_client.state import Subscription
from conduit_client.utils.logging import get_component_logger
from conduit_client.views.favorites import ListFavorites
from conduit_client.views.tags import TagsSidebar


class HomeView:
    """Switches the list with the session: personal feed when signed in,
    global list otherwise.

    Usage:
        home = HomeView(session, query, sidebar, actions)
        home.start()
        await home.select_tag("python")
        await home.toggle_favorite(slug)
    """

    def __init__(
        self,
        session: SessionStore,
        query: ArticleListQuery,
        tags: TagsSidebar,
        actions: ConduitActions,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._session = session
        self.query = query
        self.tags = tags
        self.favorites = ListFavorites(actions, query, logger=logger)
        self._logger = get_component_logger("HomeView", logger)
        self._auth_sub: Optional[Subscription] = None
        self.selected_tag: Optional[str] = None

    def start(self) -> None:
        """Follow the authenticated predicate (replays the current value)."""
        if self._auth_sub is None:
            self._auth_sub = self._session.is_authenticated.subscribe(self._on_auth_changed)

    def _on_auth_changed(self, authenticated: bool) -> None:
        self.set_list_to(SelectionType.FEED if authenticated else SelectionType.ALL)

    def set_list_to(
        self,
        selection_type: SelectionType = SelectionType.ALL,
        filters: Optional[Mapping[str, FilterValue]] = None,
    ) -> Optional[asyncio.Task]:
        self.selected_tag = (filters or {}).get("tag") if selection_type is SelectionType.BY_TAG else None
        return self.query.set_query(selection_type, filters)

    def select_tag(self, tag: str) -> Optional[asyncio.Task]:
        return self.set_list_to(SelectionType.BY_TAG, {"tag": tag})

    async def toggle_favorite(self, slug: str) -> Optional[Article]:
        return await self.favorites.toggle(slug)

    def close(self) -> None:
        if self._auth_sub is not None:
            self._auth_sub.unsubscribe()
            self._auth_sub = None
        self.query.close()
        self.favorites.clear()
