"""Profile page: the profile, its follow button and its article tabs."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from conduit_client.actions import ConduitActions, FollowOutcome
from conduit_client.api import ProfilesApi
from conduit_client.overlay import OverlayHost, fold_profile
from conduit_client.protocols import Article, LoggerProtocol, NavigatorProtocol, Profile, SelectionType
from conduit_client.query import ArticleListQuery
from conduit_client.session import SessionStore
from conduit_client.state import StateCell, Subscription
from conduit_client.utils.logging import get_component_logger
from conduit_client.utils.tasks import wait_settled
from conduit_client.views.favorites import ListFavorites


class ProfileView:
    def __init__(
        self,
        session: SessionStore,
        profiles: ProfilesApi,
        query: ArticleListQuery,
        actions: ConduitActions,
        navigator: NavigatorProtocol,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._session = session
        self._navigator = navigator
        self._logger = get_component_logger("ProfileView", logger)

        self.profile: OverlayHost[Profile] = OverlayHost(
            profiles.get, fold_profile, name="profile", logger=logger
        )
        self.articles = query
        self.favorites = ListFavorites(actions, query, logger=logger)
        self.is_user: StateCell[bool] = StateCell(False, name="is_user")
        self.showing_favorites = False

        self.follow_action = actions.follow(self.profile)
        self.unfollow_action = actions.unfollow(self.profile)

        self._subs: List[Subscription] = [
            self.profile.failures.subscribe(self._on_profile_failed),
            self.profile.value.subscribe(lambda _: self._update_is_user()),
            session.current_identity.subscribe(lambda _: self._update_is_user()),
        ]

    def _on_profile_failed(self, error) -> None:
        self._logger.info("profile_unavailable", username=self.profile.focus_key, error=str(error))
        self._navigator.navigate("/")

    def _update_is_user(self) -> None:
        profile = self.profile.value.value
        identity = self._session.identity
        self.is_user.set(profile is not None and identity is not None and identity.username == profile.username)

    @property
    def username(self) -> Optional[str]:
        return self.profile.focus_key

    async def open(self, username: str, *, favorites: bool = False) -> Optional[Profile]:
        """Load the profile and the authored (or favorited) articles."""
        overlay = self.profile.focus(username)
        list_task = self.show_articles(favorites)
        await wait_settled(overlay.load(), list_task)
        return self.profile.value.value

    def show_articles(self, favorites: bool = False) -> Optional[asyncio.Task]:
        username = self.username
        if username is None:
            return None
        self.showing_favorites = favorites
        if favorites:
            return self.articles.set_query(SelectionType.FAVORITED_BY, {"favorited": username})
        return self.articles.set_query(SelectionType.BY_AUTHOR, {"author": username})

    async def toggle_follow(self) -> Optional[FollowOutcome]:
        profile = self.profile.value.value
        if profile is None:
            return None
        action = self.unfollow_action if profile.following else self.follow_action
        return await action.invoke(profile.username)

    async def toggle_favorite(self, slug: str) -> Optional[Article]:
        return await self.favorites.toggle(slug)

    def close(self) -> None:
        for sub in self._subs:
            sub.unsubscribe()
        self._subs.clear()
        self.profile.close()
        self.articles.close()
        self.favorites.clear()
