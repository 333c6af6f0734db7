"""Action catalogue - every write expressed as a guarded Mutation.

Each factory returns a fresh Mutation (one submission guard per consumer)
wired with its declared success effect:

    login, register, update_user        -> SessionStore.set_auth
    create_article, update_article      -> navigate to the article
    delete_article                      -> navigate home
    favorite, unfavorite                -> FavoriteToggled patch (article
                                           overlay or listed article)
    follow, unfollow                    -> FollowToggled patch
    add_comment, delete_comment         -> CommentAdded / CommentRemoved patch

Callers append their own effects (clear a form, navigate) with
``Mutation.then``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from conduit_client.api import ArticleDraft, ArticlesApi, CommentsApi, ProfilesApi, UsersApi
from conduit_client.mutations import Mutation
from conduit_client.navigation import article_path
from conduit_client.overlay import (
    CommentAdded,
    CommentRemoved,
    FavoriteToggled,
    FollowToggled,
    OverlayPatch,
    PatchTarget,
)
from conduit_client.protocols import (
    Article,
    Comment,
    Identity,
    LoggerProtocol,
    NavigatorProtocol,
    Profile,
)
from conduit_client.session import SessionStore
from conduit_client.utils.logging import get_component_logger


@dataclass(frozen=True)
class FollowOutcome:
    """Result of a follow toggle, tagged with the overlay key it patches."""
    key: str
    profile: Profile


@dataclass(frozen=True)
class CommentPosted:
    slug: str
    comment: Comment


@dataclass(frozen=True)
class CommentDeleted:
    slug: str
    comment_id: str


class ConduitActions:
    """Builds guarded mutations bound to the session and API clients."""

    def __init__(
        self,
        session: SessionStore,
        navigator: NavigatorProtocol,
        users: UsersApi,
        articles: ArticlesApi,
        comments: CommentsApi,
        profiles: ProfilesApi,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._session = session
        self._navigator = navigator
        self._users = users
        self._articles = articles
        self._comments = comments
        self._profiles = profiles
        self._logger = logger
        self._log = get_component_logger("ConduitActions", logger)

    def _mutation(self, name: str, call, **kwargs) -> Mutation:
        return Mutation(name, call, logger=self._logger, **kwargs)

    def _require_auth(self, redirect: str):
        """Precondition: anonymous callers are redirected, not served."""
        def check() -> bool:
            if self._session.authenticated:
                return True
            self._log.info("action_requires_auth", redirect=redirect)
            self._navigator.navigate(redirect)
            return False
        return check

    @staticmethod
    def _patcher(targets: Sequence[PatchTarget], make_patch):
        def emit(result) -> None:
            patch: OverlayPatch = make_patch(result)
            for host in targets:
                host.apply_patch(patch)
        return emit

    # =========================================================================
    # Session
    # =========================================================================

    def login(self) -> Mutation[Identity]:
        return self._mutation("login", self._users.login, on_success=[self._session.set_auth])

    def register(self) -> Mutation[Identity]:
        return self._mutation("register", self._users.register, on_success=[self._session.set_auth])

    def update_user(self) -> Mutation[Identity]:
        return self._mutation("update_user", self._users.update, on_success=[self._session.set_auth])

    # =========================================================================
    # Articles
    # =========================================================================

    def _show_article(self, article: Article) -> None:
        self._navigator.navigate(article_path(article.slug))

    def create_article(self) -> Mutation[Article]:
        return self._mutation("create_article", self._articles.create, on_success=[self._show_article])

    def update_article(self) -> Mutation[Article]:
        async def call(slug: str, draft: ArticleDraft) -> Article:
            return await self._articles.update(slug, draft)
        return self._mutation("update_article", call, on_success=[self._show_article])

    def delete_article(self) -> Mutation[None]:
        return self._mutation(
            "delete_article",
            self._articles.delete,
            on_success=[lambda _: self._navigator.navigate("/")],
        )

    def favorite(self, *targets: PatchTarget) -> Mutation[Article]:
        return self._mutation(
            "favorite",
            self._articles.favorite,
            precondition=self._require_auth("/register"),
            on_success=[self._patcher(targets, lambda a: FavoriteToggled(a.slug, True))],
        )

    def unfavorite(self, *targets: PatchTarget) -> Mutation[Article]:
        return self._mutation(
            "unfavorite",
            self._articles.unfavorite,
            precondition=self._require_auth("/register"),
            on_success=[self._patcher(targets, lambda a: FavoriteToggled(a.slug, False))],
        )

    # =========================================================================
    # Profiles
    # =========================================================================

    def follow(self, *targets: PatchTarget) -> Mutation[FollowOutcome]:
        """Follow ``username``; the patch targets ``key`` (default: the username)."""
        async def call(username: str, key: Optional[str] = None) -> FollowOutcome:
            profile = await self._profiles.follow(username)
            return FollowOutcome(key or username, profile)
        return self._mutation(
            "follow",
            call,
            precondition=self._require_auth("/login"),
            on_success=[self._patcher(targets, lambda o: FollowToggled(o.key, True))],
        )

    def unfollow(self, *targets: PatchTarget) -> Mutation[FollowOutcome]:
        async def call(username: str, key: Optional[str] = None) -> FollowOutcome:
            profile = await self._profiles.unfollow(username)
            return FollowOutcome(key or username, profile)
        return self._mutation(
            "unfollow",
            call,
            precondition=self._require_auth("/login"),
            on_success=[self._patcher(targets, lambda o: FollowToggled(o.key, False))],
        )

    # =========================================================================
    # Comments
    # =========================================================================

    def add_comment(self, *targets: PatchTarget) -> Mutation[CommentPosted]:
        async def call(slug: str, body: str) -> CommentPosted:
            return CommentPosted(slug, await self._comments.add(slug, body))
        return self._mutation(
            "add_comment",
            call,
            on_success=[self._patcher(targets, lambda c: CommentAdded(c.slug, c.comment))],
        )

    def delete_comment(self, *targets: PatchTarget) -> Mutation[CommentDeleted]:
        async def call(slug: str, comment_id: str) -> CommentDeleted:
            await self._comments.delete(slug, comment_id)
            return CommentDeleted(slug, comment_id)
        return self._mutation(
            "delete_comment",
            call,
            on_success=[self._patcher(targets, lambda c: CommentRemoved(c.slug, c.comment_id))],
        )


__all__ = [
    "ConduitActions",
    "FollowOutcome",
    "CommentPosted",
    "CommentDeleted",
]
