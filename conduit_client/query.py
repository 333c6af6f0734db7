"""ArticleListQuery - paginated, parametrized article listing.

Turns a mutable QueryDescriptor into (results, loading state, page count).
Every descriptor change starts a new fetch cycle:

    set_query / set_page
           | descriptor replaced, loading -> LOADING
    fetch task (generation N)        <- previous task cancelled
           | result tagged with generation N
    publish only if N is still current -> results, page_count, LOADED

Last-descriptor-wins: a superseded fetch never publishes, whether or not
its transport honoured the cancellation.

A favorite toggled from the list is folded onto the listed article in
place (apply_patch), so the page is not refetched.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from conduit_client.api import ArticlesApi
from conduit_client.errors import ConduitClientError
from conduit_client.overlay import FavoriteToggled, OverlayPatch, fold_article
from conduit_client.protocols import (
    Article,
    FilterValue,
    LoadingState,
    LoggerProtocol,
    NavigatorProtocol,
    QueryDescriptor,
    SelectionType,
)
from conduit_client.session import SessionStore
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class ListSnapshot:
    """Consistent view of one list for consumers that render it whole."""
    descriptor: QueryDescriptor
    loading: LoadingState
    items: Tuple[Article, ...]
    page_count: int

    @property
    def pages(self) -> List[int]:
        return list(range(1, self.page_count + 1))


def page_count_for(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size)


class ArticleListQuery:
    """Query engine for one article list.

    Usage:
        query = ArticleListQuery(articles_api, session, navigator, page_size=10)
        await query.set_query(SelectionType.BY_TAG, {"tag": "python"})
        query.results.value       # articles on page 1
        await query.set_page(2)
    """

    def __init__(
        self,
        articles: ArticlesApi,
        session: SessionStore,
        navigator: NavigatorProtocol,
        *,
        page_size: int = 10,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._articles = articles
        self._session = session
        self._navigator = navigator
        self._page_size = page_size
        self._logger = get_component_logger("ArticleListQuery", logger)

        self.descriptor: StateCell[QueryDescriptor] = StateCell(
            QueryDescriptor(), name="query_descriptor", logger=self._logger
        )
        self.loading: StateCell[LoadingState] = StateCell(
            LoadingState.NOT_LOADED, name="loading_state", logger=self._logger
        )
        self.results: StateCell[Tuple[Article, ...]] = StateCell(
            (), name="results", logger=self._logger
        )
        self.page_count: StateCell[int] = StateCell(0, name="page_count", logger=self._logger)
        self.snapshot: StateCell[ListSnapshot] = StateCell(
            self._build_snapshot(), name="list_snapshot", logger=self._logger
        )
        self.last_error: Optional[ConduitClientError] = None

        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    # =========================================================================
    # Derived views
    # =========================================================================

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self.descriptor.value.page

    @property
    def pages(self) -> List[int]:
        """Page numbers 1..page_count, computed on read."""
        return list(range(1, self.page_count.value + 1))

    # =========================================================================
    # Intents
    # =========================================================================

    def set_query(
        self,
        selection_type: SelectionType = SelectionType.ALL,
        filters: Optional[Mapping[str, FilterValue]] = None,
    ) -> Optional[asyncio.Task]:
        """Replace the selection; always lands on page 1.

        The personal feed needs a session: anonymous callers are sent to
        the login route and no fetch is issued (returns None).
        """
        if selection_type is SelectionType.FEED and not self._session.authenticated:
            self._logger.info("query_feed_requires_login")
            self._navigator.navigate(LOGIN_PATH)
            return None
        descriptor = self.descriptor.value.with_selection(selection_type, filters)
        return self._start(descriptor)

    def set_page(self, page: int) -> asyncio.Task:
        """Move to ``page`` keeping selection type and filters."""
        return self._start(self.descriptor.value.with_page(page))

    def refresh(self) -> asyncio.Task:
        return self._start(self.descriptor.value)

    def close(self) -> None:
        """Cancel any in-flight fetch; nothing pending will publish."""
        self._generation += 1
        self._cancel_inflight()

    def apply_patch(self, patch: OverlayPatch) -> bool:
        """Fold a favorite toggle onto the listed article with that slug.

        Returns False when the article is not listed, the patch is not a
        favorite toggle, or the listed copy already has that flag (a page
        fetched after the toggle already counts it).
        """
        if not isinstance(patch, FavoriteToggled):
            return False

        def targeted(article: Article) -> bool:
            return article.slug == patch.key and article.favorited != patch.favorited

        items = self.results.value
        if not any(targeted(a) for a in items):
            self._logger.debug("query_patch_discarded", patch_key=patch.key)
            return False
        self.results.set(tuple(
            fold_article(a, patch) if targeted(a) else a
            for a in items
        ))
        self._publish_snapshot()
        return True

    # =========================================================================
    # Fetch cycle
    # =========================================================================

    def _start(self, descriptor: QueryDescriptor) -> asyncio.Task:
        self._cancel_inflight()
        self._generation += 1
        generation = self._generation

        self.descriptor.set(descriptor)
        self.last_error = None
        self.loading.set(LoadingState.LOADING)
        self._publish_snapshot()

        self._task = asyncio.get_running_loop().create_task(
            self._fetch(generation, descriptor)
        )
        return self._task

    async def _fetch(self, generation: int, descriptor: QueryDescriptor) -> None:
        limit = self._page_size
        offset = limit * (descriptor.page - 1)
        self._logger.debug(
            "query_fetch_started",
            generation=generation,
            selection=descriptor.selection_type.value,
            page=descriptor.page,
        )
        try:
            result = await self._articles.query(descriptor, limit=limit, offset=offset)
        except asyncio.CancelledError:
            self._logger.debug("query_fetch_cancelled", generation=generation)
            raise
        except ConduitClientError as e:
            if generation != self._generation:
                return
            self.last_error = e
            self._logger.warning("query_fetch_failed", generation=generation, error=str(e))
            self.loading.set(LoadingState.FAILED)
            self._publish_snapshot()
            return

        if generation != self._generation:
            self._logger.debug("query_fetch_superseded", generation=generation)
            return

        self.results.set(result.items)
        self.page_count.set(page_count_for(result.total_count, limit))
        self.loading.set(LoadingState.LOADED)
        self._publish_snapshot()
        self._logger.debug(
            "query_fetch_completed",
            generation=generation,
            items=len(result.items),
            total=result.total_count,
        )

    def _cancel_inflight(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _build_snapshot(self) -> ListSnapshot:
        return ListSnapshot(
            descriptor=self.descriptor.value,
            loading=self.loading.value,
            items=self.results.value,
            page_count=self.page_count.value,
        )

    def _publish_snapshot(self) -> None:
        self.snapshot.set(self._build_snapshot())


__all__ = ["ArticleListQuery", "ListSnapshot", "page_count_for", "LOGIN_PATH"]
