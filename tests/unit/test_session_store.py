"""Unit tests for SessionStore."""

from dataclasses import replace

import pytest

from conduit_client.errors import AuthorizationError, TransportError
from conduit_client.session import SessionStore
from conduit_client.storage import MemoryStorage

from fixtures.entities import make_user_dict
from fixtures.logs import logged_events


# =============================================================================
# set_auth / purge
# =============================================================================

def test_set_auth_persists_token_and_publishes(session, storage, jake):
    seen = []
    session.current_identity.subscribe(seen.append, replay=False)

    session.set_auth(jake)

    assert storage.get("jwtToken") == jake.token
    assert session.identity == jake
    assert session.authenticated is True
    assert seen == [jake]


def test_custom_token_key(jake):
    storage = MemoryStorage()
    SessionStore(storage, token_key="conduit.jwt").set_auth(jake)
    assert storage.get("conduit.jwt") == jake.token
    assert storage.get("jwtToken") is None


def test_purge_removes_token_and_is_idempotent(session, storage, jake, mock_logger):
    session.set_auth(jake)
    session.purge()
    session.purge()

    assert storage.get("jwtToken") is None
    assert session.identity is None
    assert session.authenticated is False
    assert logged_events(mock_logger).count("session_purged") == 1


def test_authenticated_reemits_only_on_transitions(session, jake):
    seen = []
    session.is_authenticated.subscribe(seen.append, replay=False)

    session.purge()
    session.set_auth(jake)
    session.set_auth(replace(jake, bio="updated"))
    session.purge()

    assert seen == [True, False]


def test_authenticated_replays_to_new_subscriber(signed_in):
    seen = []
    signed_in.is_authenticated.subscribe(seen.append)
    assert seen == [True]


def test_set_auth_with_equal_identity_is_not_republished(session, jake):
    session.set_auth(jake)
    seen = []
    session.current_identity.subscribe(seen.append, replay=False)
    session.set_auth(replace(jake))
    assert seen == []


def test_set_auth_without_token_keeps_stored_token(signed_in, storage, jake):
    updated = replace(jake, bio="new", token="")
    signed_in.set_auth(updated)
    assert storage.get("jwtToken") == jake.token
    assert signed_in.identity.token == jake.token
    assert signed_in.identity.bio == "new"


def test_logout_navigates_home(signed_in, navigator):
    navigator.navigate("/settings")
    signed_in.logout(navigator)
    assert signed_in.identity is None
    assert navigator.path == "/"


# =============================================================================
# Revalidation
# =============================================================================

@pytest.mark.asyncio
async def test_revalidate_success_sets_identity(session, users, transport):
    transport.respond("GET", "/user", {"user": make_user_dict(token="fresh")})

    identity = await session.revalidate(users)

    assert identity.token == "fresh"
    assert session.get_token() == "fresh"


@pytest.mark.asyncio
async def test_revalidate_unauthorized_purges(signed_in, users, transport, mock_logger):
    transport.respond("GET", "/user", AuthorizationError(401))

    assert await signed_in.revalidate(users) is None

    assert signed_in.identity is None
    assert signed_in.get_token() is None
    assert "session_expired" in logged_events(mock_logger)


@pytest.mark.asyncio
async def test_revalidate_network_failure_purges(signed_in, users, transport):
    transport.respond("GET", "/user", TransportError("GET /user failed"))
    assert await signed_in.revalidate(users) is None
    assert signed_in.authenticated is False


@pytest.mark.asyncio
async def test_restore_skips_without_token(session, users, transport):
    assert await session.restore(users) is None
    assert transport.calls == []


@pytest.mark.asyncio
async def test_restore_with_persisted_token(users, transport):
    storage = MemoryStorage({"jwtToken": "T"})
    session = SessionStore(storage)
    transport.respond("GET", "/user", {"user": make_user_dict(token="T")})

    identity = await session.restore(users)

    assert identity.username == "jake"
    assert session.authenticated is True
