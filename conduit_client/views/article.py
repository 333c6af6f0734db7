"""Article page: the article, its comments and the actions on both."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Tuple

from conduit_client.actions import CommentDeleted, CommentPosted, ConduitActions, FollowOutcome
from conduit_client.api import ArticlesApi, CommentsApi
from conduit_client.errors import ValidationFailed, format_errors
from conduit_client.mutations import Mutation
from conduit_client.overlay import CommentList, OverlayHost, fold_article, fold_comments
from conduit_client.protocols import Article, Comment, LoggerProtocol, NavigatorProtocol
from conduit_client.session import SessionStore
from conduit_client.state import StateCell, Subscription
from conduit_client.utils.logging import get_component_logger
from conduit_client.utils.tasks import wait_settled


class ArticleView:
    """Two overlays keyed by the article slug.

    The favorite and follow buttons patch ``article`` in place; posting or
    deleting a comment patches ``comments``. A failed article fetch sends
    the reader back home.
    """

    def __init__(
        self,
        session: SessionStore,
        articles: ArticlesApi,
        comments: CommentsApi,
        actions: ConduitActions,
        navigator: NavigatorProtocol,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._session = session
        self._navigator = navigator
        self._logger = get_component_logger("ArticleView", logger)

        async def fetch_comments(slug: str) -> CommentList:
            return tuple(await comments.get_all(slug))

        self.article: OverlayHost[Article] = OverlayHost(
            articles.get, fold_article, name="article", logger=logger
        )
        self.comments: OverlayHost[CommentList] = OverlayHost(
            fetch_comments, fold_comments, name="comments", logger=logger
        )

        self.comment_draft: StateCell[str] = StateCell("", name="comment_draft")
        self.can_modify: StateCell[bool] = StateCell(False, name="can_modify")

        self.favorite_action = actions.favorite(self.article)
        self.unfavorite_action = actions.unfavorite(self.article)
        self.follow_action = actions.follow(self.article)
        self.unfollow_action = actions.unfollow(self.article)
        self.delete_action = actions.delete_article()
        self.comment_action = actions.add_comment(self.comments).then(
            lambda _: self.comment_draft.set("")
        )
        self._actions = actions
        self._delete_comment_actions: Dict[str, Mutation[CommentDeleted]] = {}

        self._subs: List[Subscription] = [
            self.article.failures.subscribe(self._on_article_failed),
            self.article.value.subscribe(lambda _: self._update_can_modify()),
            session.current_identity.subscribe(lambda _: self._update_can_modify()),
        ]

    def _on_article_failed(self, error) -> None:
        self._logger.info("article_unavailable", slug=self.article.focus_key, error=str(error))
        self._navigator.navigate("/")

    def _update_can_modify(self) -> None:
        article = self.article.value.value
        identity = self._session.identity
        self.can_modify.set(
            article is not None and identity is not None and identity.username == article.author.username
        )

    @property
    def slug(self) -> Optional[str]:
        return self.article.focus_key

    @property
    def comment_errors(self) -> List[str]:
        return format_errors(self.comment_action.errors.value)

    def focus(self, slug: str) -> Tuple[asyncio.Task, asyncio.Task]:
        """Point both overlays at ``slug`` and start their fetches."""
        article = self.article.focus(slug)
        comments = self.comments.focus(slug)
        return article.load(), comments.load()

    async def open(self, slug: str) -> Optional[Article]:
        await wait_settled(*self.focus(slug))
        return self.article.value.value

    # =========================================================================
    # Actions
    # =========================================================================

    async def toggle_favorite(self) -> Optional[Article]:
        article = self.article.value.value
        if article is None:
            return None
        action = self.unfavorite_action if article.favorited else self.favorite_action
        return await action.invoke(article.slug)

    async def toggle_follow(self) -> Optional[FollowOutcome]:
        article = self.article.value.value
        if article is None:
            return None
        action = self.unfollow_action if article.author.following else self.follow_action
        return await action.invoke(article.author.username, key=article.slug)

    async def delete_article(self) -> None:
        if self.slug is not None:
            await self.delete_action.invoke(self.slug)

    async def add_comment(self, body: Optional[str] = None) -> Optional[Comment]:
        if body is not None:
            self.comment_draft.set(body)
        if self.slug is None:
            return None
        try:
            posted: Optional[CommentPosted] = await self.comment_action.invoke(
                self.slug, self.comment_draft.value
            )
        except ValidationFailed:
            return None
        return posted.comment if posted else None

    def delete_comment_action(self, comment_id: str) -> Mutation[CommentDeleted]:
        """The delete button of one comment; each comment has its own guard."""
        if comment_id not in self._delete_comment_actions:
            self._delete_comment_actions[comment_id] = self._actions.delete_comment(self.comments)
        return self._delete_comment_actions[comment_id]

    async def delete_comment(self, comment_id: str) -> Optional[CommentDeleted]:
        if self.slug is None:
            return None
        return await self.delete_comment_action(comment_id).invoke(self.slug, comment_id)

    def close(self) -> None:
        for sub in self._subs:
            sub.unsubscribe()
        self._subs.clear()
        self.article.close()
        self.comments.close()
        self._delete_comment_actions.clear()
