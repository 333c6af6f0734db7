"""AppContext - the wired client.

Built once by the composition root (conduit_client.bootstrap) and handed
to whatever hosts the client. Components never reach for globals; they
receive their collaborators from here.

Usage:
    from conduit_client.bootstrap import create_app_context, startup

    ctx = create_app_context()
    await startup(ctx)
    home = ctx.home_view()
    home.start()
"""

from dataclasses import dataclass
from typing import Any, Optional

from conduit_client.actions import ConduitActions
from conduit_client.api import ArticlesApi, CommentsApi, ProfilesApi, TagsApi, UsersApi
from conduit_client.navigation import HistoryNavigator
from conduit_client.protocols import (
    KeyValueStoreProtocol,
    LoggerProtocol,
    NavigatorProtocol,
    TransportProtocol,
)
from conduit_client.query import ArticleListQuery
from conduit_client.session import SessionStore
from conduit_client.settings import Settings
from conduit_client.views import (
    ArticleView,
    AuthMode,
    AuthView,
    EditorView,
    HomeView,
    ProfileView,
    SettingsView,
    TagsSidebar,
)


@dataclass
class AppContext:
    """Every long-lived client component.

    Attributes:
        settings: Client settings
        logger: Root logger
        storage: Key-value store holding the session token
        transport: REST transport (implements TransportProtocol)
        navigator: Navigation sink used by every effect (route-guarded by default)
        session: The single SessionStore
        history: Path history when the default navigator is used
    """

    settings: Settings
    logger: LoggerProtocol
    storage: KeyValueStoreProtocol
    transport: TransportProtocol
    navigator: NavigatorProtocol
    session: SessionStore
    users: UsersApi
    articles: ArticlesApi
    comments: CommentsApi
    profiles: ProfilesApi
    tags: TagsApi
    actions: ConduitActions
    history: Optional[HistoryNavigator] = None

    def get_bound_logger(self, component: str, **extra: Any) -> LoggerProtocol:
        return self.logger.bind(component=component, **extra)

    # ─── View factories ───

    def article_list(self, page_size: Optional[int] = None) -> ArticleListQuery:
        return ArticleListQuery(
            self.articles,
            self.session,
            self.navigator,
            page_size=page_size or self.settings.article_page_size,
            logger=self.logger,
        )

    def home_view(self) -> HomeView:
        return HomeView(
            self.session,
            self.article_list(),
            TagsSidebar(self.tags, logger=self.logger),
            self.actions,
            logger=self.logger,
        )

    def article_view(self) -> ArticleView:
        return ArticleView(
            self.session, self.articles, self.comments, self.actions, self.navigator, logger=self.logger
        )

    def profile_view(self) -> ProfileView:
        return ProfileView(
            self.session,
            self.profiles,
            self.article_list(self.settings.profile_page_size),
            self.actions,
            self.navigator,
            logger=self.logger,
        )

    def editor_view(self) -> EditorView:
        return EditorView(
            self.session, self.articles, self.users, self.actions, self.navigator, logger=self.logger
        )

    def settings_view(self) -> SettingsView:
        return SettingsView(self.session, self.users, self.actions, self.navigator)

    def auth_view(self, mode: AuthMode = AuthMode.LOGIN) -> AuthView:
        return AuthView(mode, self.actions, self.navigator)


__all__ = ["AppContext"]
