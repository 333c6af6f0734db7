"""End-to-end flows through the composition root.

The whole client is built with create_app_context; only the transport is
scripted.
"""

import asyncio

import pytest

from conduit_client.bootstrap import aclose, create_app_context, startup
from conduit_client.protocols import LoadingState, SelectionType
from conduit_client.settings import Settings
from conduit_client.storage import MemoryStorage
from conduit_client.transport import HttpTransport
from conduit_client.views import AuthMode

from fixtures.entities import (
    make_article_dict,
    make_article_list_dict,
    make_comment_dict,
    make_user_dict,
)
from fixtures.transport import FakeTransport

pytestmark = pytest.mark.integration


@pytest.fixture
def ctx(mock_logger):
    return create_app_context(
        Settings(_env_file=None),
        transport=FakeTransport(),
        storage=MemoryStorage(),
        logger=mock_logger,
    )


async def settle():
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_login_persists_token_under_fixed_key(ctx):
    ctx.transport.respond("POST", "/users/login", {"user": make_user_dict(username="u", token="T")})
    auth = ctx.auth_view(AuthMode.LOGIN)
    ctx.navigator.navigate("/login")

    await auth.submit("u@example.com", "pw")

    assert ctx.storage.get("jwtToken") == "T"
    assert ctx.session.identity.username == "u"
    assert ctx.history.path == "/"


@pytest.mark.asyncio
async def test_anonymous_feed_request_goes_to_login(ctx):
    query = ctx.article_list()

    query.set_query(SelectionType.FEED)

    assert ctx.history.path == "/login"
    assert ctx.transport.calls == []


@pytest.mark.asyncio
async def test_startup_restores_session_and_home_switches_to_feed(mock_logger):
    transport = FakeTransport()
    transport.respond("GET", "/user", {"user": make_user_dict(token="T")})
    transport.respond("GET", "/articles/feed", make_article_list_dict([make_article_dict()]))
    ctx = create_app_context(
        Settings(_env_file=None),
        transport=transport,
        storage=MemoryStorage({"jwtToken": "T"}),
        logger=mock_logger,
    )

    identity = await startup(ctx)
    home = ctx.home_view()
    home.start()
    await settle()

    assert identity.username == "jake"
    assert home.query.descriptor.value.selection_type is SelectionType.FEED
    assert home.query.loading.value is LoadingState.LOADED
    home.close()


@pytest.mark.asyncio
async def test_route_guards_apply_to_effects(ctx):
    ctx.navigator.navigate("/settings")
    assert ctx.history.path == "/"

    ctx.navigator.navigate("/login")
    assert ctx.history.path == "/login"


@pytest.mark.asyncio
async def test_read_favorite_and_comment_on_an_article(ctx):
    slug = "how-to-train-your-dragon"
    t = ctx.transport
    t.respond("POST", "/users/login", {"user": make_user_dict()})
    t.respond("GET", f"/articles/{slug}", {"article": make_article_dict(slug=slug)})
    t.respond("GET", f"/articles/{slug}/comments", {"comments": []})
    t.respond("POST", f"/articles/{slug}/favorite", {"article": make_article_dict(slug=slug, favorited=True)})
    t.respond("POST", f"/articles/{slug}/comments", {"comment": make_comment_dict(id=9, body="Great")})

    await ctx.auth_view().submit("jake@jake.jake", "pw")
    view = ctx.article_view()
    await view.open(slug)
    await view.toggle_favorite()
    await view.add_comment("Great")

    article = view.article.value.value
    assert article.favorited is True
    assert article.favorites_count == 1
    assert [c.body for c in view.comments.value.value] == ["Great"]
    assert view.can_modify.value is True
    view.close()


@pytest.mark.asyncio
async def test_default_wiring_builds_http_transport(tmp_path, mock_logger):
    settings = Settings(_env_file=None, storage_backend="file", storage_path=str(tmp_path / "s.json"))
    ctx = create_app_context(settings, logger=mock_logger)

    assert isinstance(ctx.transport, HttpTransport)
    assert ctx.session.token_key == "jwtToken"

    await aclose(ctx)
    assert "app_context_closed" in [c.args[0] for c in mock_logger.info.call_args_list]


def test_bound_logger(ctx, mock_logger):
    ctx.get_bound_logger("HomeView", page="home")
    mock_logger.bind.assert_called_with(component="HomeView", page="home")
