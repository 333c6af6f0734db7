"""Article editor: create a new article or edit one the reader owns."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from conduit_client.actions import ConduitActions
from conduit_client.api import ArticleDraft, ArticlesApi, UsersApi
from conduit_client.errors import ValidationFailed, format_errors
from conduit_client.protocols import Article, LoggerProtocol, NavigatorProtocol
from conduit_client.session import SessionStore
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger


class EditorView:
    """Form state plus the create/update submission.

    ``tag_input`` holds a tag typed but not yet added; submitting adds it
    before sending.
    """

    def __init__(
        self,
        session: SessionStore,
        articles: ArticlesApi,
        users: UsersApi,
        actions: ConduitActions,
        navigator: NavigatorProtocol,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._session = session
        self._articles = articles
        self._users = users
        self._navigator = navigator
        self._logger = get_component_logger("EditorView", logger)

        self.slug: Optional[str] = None
        self.draft: StateCell[ArticleDraft] = StateCell(ArticleDraft(), name="editor_draft")
        self.tag_input = ""
        self.create_action = actions.create_article()
        self.update_action = actions.update_article()

    @property
    def submitting(self) -> bool:
        return self.create_action.in_flight or self.update_action.in_flight

    @property
    def error_lines(self) -> List[str]:
        action = self.update_action if self.slug else self.create_action
        return format_errors(action.errors.value)

    async def load(self, slug: Optional[str] = None) -> bool:
        """Prefill from an existing article.

        Only the author may edit; anyone else is sent home and False is
        returned.
        """
        self.slug = None
        if slug is None:
            self.draft.set(ArticleDraft())
            return True

        article: Article = await self._articles.get(slug)
        identity = await self._session.revalidate(self._users)
        if identity is None or identity.username != article.author.username:
            self._logger.info("editor_not_author", slug=slug)
            self._navigator.navigate("/")
            return False

        self.slug = article.slug
        self.draft.set(
            ArticleDraft(
                title=article.title,
                description=article.description,
                body=article.body,
                tag_list=list(article.tag_list),
            )
        )
        return True

    def edit(self, **fields) -> ArticleDraft:
        """Change title, description or body."""
        draft = replace(self.draft.value, **fields)
        self.draft.set(draft)
        return draft

    def add_tag(self, tag: Optional[str] = None) -> bool:
        """Add ``tag`` (or the pending ``tag_input``); blanks and duplicates are skipped."""
        if tag is None:
            tag = self.tag_input
        self.tag_input = ""
        tag = tag.strip()
        draft = self.draft.value
        if not tag or tag in draft.tag_list:
            return False
        self.draft.set(replace(draft, tag_list=list(draft.tag_list) + [tag]))
        return True

    def remove_tag(self, tag: str) -> bool:
        draft = self.draft.value
        if tag not in draft.tag_list:
            return False
        self.draft.set(replace(draft, tag_list=[t for t in draft.tag_list if t != tag]))
        return True

    async def submit(self) -> Optional[Article]:
        self.add_tag()
        try:
            if self.slug:
                return await self.update_action.invoke(self.slug, self.draft.value)
            return await self.create_action.invoke(self.draft.value)
        except ValidationFailed:
            return None
