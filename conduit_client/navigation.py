"""Navigation effects and route guards.

Routing mechanics belong to the consumer; the client only emits
navigation intents through NavigatorProtocol. HistoryNavigator records
them, GuardedNavigator refuses routes the session may not enter:

    /login, /register            anonymous only
    /settings, /editor[/:slug]   authenticated only
    everything else              open
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from conduit_client.protocols import LoggerProtocol, NavigatorProtocol
from conduit_client.session import SessionStore
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger


class RouteAccess(str, Enum):
    OPEN = "open"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Route:
    pattern: str
    access: RouteAccess = RouteAccess.OPEN

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Return the path parameters if ``path`` matches, else None."""
        want = [p for p in self.pattern.split("/") if p]
        got = [p for p in path.split("?", 1)[0].split("/") if p]
        if len(want) != len(got):
            return None
        params: Dict[str, str] = {}
        for w, g in zip(want, got):
            if w.startswith(":"):
                params[w[1:]] = g
            elif w != g:
                return None
        return params


ROUTES: Tuple[Route, ...] = (
    Route("/"),
    Route("/login", RouteAccess.ANONYMOUS),
    Route("/register", RouteAccess.ANONYMOUS),
    Route("/settings", RouteAccess.AUTHENTICATED),
    Route("/editor", RouteAccess.AUTHENTICATED),
    Route("/editor/:slug", RouteAccess.AUTHENTICATED),
    Route("/article/:slug"),
    Route("/profile/:username"),
    Route("/profile/:username/favorites"),
)


def match_route(path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
    for route in ROUTES:
        params = route.match(path)
        if params is not None:
            return route, params
    return None


def can_activate(path: str, session: SessionStore) -> bool:
    """Unknown paths are treated as open."""
    matched = match_route(path)
    if matched is None:
        return True
    access = matched[0].access
    if access is RouteAccess.AUTHENTICATED:
        return session.authenticated
    if access is RouteAccess.ANONYMOUS:
        return not session.authenticated
    return True


def article_path(slug: str) -> str:
    return f"/article/{slug}"


def profile_path(username: str) -> str:
    return f"/profile/{username}"


class HistoryNavigator:
    """NavigatorProtocol implementation that records every navigation."""

    def __init__(self, initial: str = "/", logger: Optional[LoggerProtocol] = None) -> None:
        self._logger = get_component_logger("HistoryNavigator", logger)
        self.history: List[str] = [initial]
        self.current: StateCell[str] = StateCell(initial, name="current_path", distinct=False)

    @property
    def path(self) -> str:
        return self.current.value

    def navigate(self, path: str) -> None:
        self._logger.debug("navigate", path=path)
        self.history.append(path)
        self.current.set(path)


class GuardedNavigator:
    """Applies route guards before delegating to another navigator."""

    def __init__(
        self,
        inner: NavigatorProtocol,
        session: SessionStore,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._inner = inner
        self._session = session
        self._logger = get_component_logger("GuardedNavigator", logger)

    def navigate(self, path: str) -> None:
        if not can_activate(path, self._session):
            self._logger.info("navigation_blocked", path=path)
            return
        self._inner.navigate(path)


__all__ = [
    "RouteAccess",
    "Route",
    "ROUTES",
    "match_route",
    "can_activate",
    "article_path",
    "profile_path",
    "HistoryNavigator",
    "GuardedNavigator",
]
