"""Page controllers wiring queries, overlays and actions together."""

from conduit_client.views.article import ArticleView
from conduit_client.views.auth import AuthMode, AuthView
from conduit_client.views.favorites import ListFavorites
from conduit_client.views.editor import EditorView
from conduit_client.views.home import HomeView
from conduit_client.views.profile import ProfileView
from conduit_client.views.settings import SettingsForm, SettingsView
from conduit_client.views.tags import TagsSidebar

__all__ = [
    "ArticleView",
    "AuthMode",
    "AuthView",
    "EditorView",
    "HomeView",
    "ListFavorites",
    "ProfileView",
    "SettingsForm",
    "SettingsView",
    "TagsSidebar",
]
