"""Pytest configuration for conduit-client tests.

Every component is wired by hand against a FakeTransport, an in-memory
token store and a HistoryNavigator, so tests can script responses and
inspect navigation.
"""

import sys
from pathlib import Path

import pytest

# 1. repository root (for conduit_client)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

# 2. tests directory (for fixtures.*)
tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from conduit_client.actions import ConduitActions
from conduit_client.api import ArticlesApi, CommentsApi, ProfilesApi, TagsApi, UsersApi
from conduit_client.navigation import HistoryNavigator
from conduit_client.protocols import Identity
from conduit_client.session import SessionStore
from conduit_client.storage import MemoryStorage

from fixtures.entities import make_user_dict
from fixtures.transport import FakeTransport


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (may use mocks)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests wiring the whole client through bootstrap"
    )


# =============================================================================
# WIRING FIXTURES
# =============================================================================

@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def session(storage, mock_logger):
    return SessionStore(storage, logger=mock_logger)


@pytest.fixture
def navigator():
    return HistoryNavigator()


@pytest.fixture
def users(transport):
    return UsersApi(transport)


@pytest.fixture
def articles(transport):
    return ArticlesApi(transport)


@pytest.fixture
def comments(transport):
    return CommentsApi(transport)


@pytest.fixture
def profiles(transport):
    return ProfilesApi(transport)


@pytest.fixture
def tags(transport):
    return TagsApi(transport)


@pytest.fixture
def actions(session, navigator, users, articles, comments, profiles, mock_logger):
    return ConduitActions(session, navigator, users, articles, comments, profiles, logger=mock_logger)


@pytest.fixture
def jake():
    return Identity.from_wire(make_user_dict())


@pytest.fixture
def signed_in(session, jake):
    """A session with ``jake`` authenticated."""
    session.set_auth(jake)
    return session
