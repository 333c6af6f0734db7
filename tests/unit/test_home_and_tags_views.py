"""Unit tests for HomeView and TagsSidebar."""

import asyncio

import pytest

from conduit_client.protocols import LoadingState, SelectionType
from conduit_client.query import ArticleListQuery
from conduit_client.views import HomeView, TagsSidebar

from fixtures.entities import make_article_dict, make_article_list_dict


async def settle():
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture
def home(session, articles, tags, actions, navigator, transport):
    transport.respond("GET", "/articles", make_article_list_dict())
    transport.respond("GET", "/articles/feed", make_article_list_dict())
    query = ArticleListQuery(articles, session, navigator, page_size=10)
    view = HomeView(session, query, TagsSidebar(tags), actions)
    yield view
    view.close()


@pytest.mark.asyncio
async def test_anonymous_home_shows_global_list(home, transport):
    home.start()
    await settle()

    assert home.query.descriptor.value.selection_type is SelectionType.ALL
    assert home.query.loading.value is LoadingState.LOADED
    assert [c.path for c in transport.calls] == ["/articles"]


@pytest.mark.asyncio
async def test_signed_in_home_shows_feed(home, session, jake, transport):
    session.set_auth(jake)
    home.start()
    await settle()

    assert home.query.descriptor.value.selection_type is SelectionType.FEED
    assert [c.path for c in transport.calls] == ["/articles/feed"]


@pytest.mark.asyncio
async def test_list_follows_login_and_logout(home, session, jake, navigator):
    home.start()
    await settle()

    session.set_auth(jake)
    await settle()
    assert home.query.descriptor.value.selection_type is SelectionType.FEED

    session.logout(navigator)
    await settle()
    assert home.query.descriptor.value.selection_type is SelectionType.ALL


@pytest.mark.asyncio
async def test_select_tag(home, transport):
    home.start()
    await settle()

    await home.select_tag("dragons")

    assert home.selected_tag == "dragons"
    assert transport.calls[-1].params == {"tag": "dragons", "limit": 10, "offset": 0}


@pytest.mark.asyncio
async def test_feed_tab_while_anonymous_redirects(home, navigator):
    assert home.set_list_to(SelectionType.FEED) is None
    assert navigator.path == "/login"


@pytest.mark.asyncio
async def test_close_stops_following_session(home, session, jake, transport):
    home.start()
    await settle()
    home.close()

    session.set_auth(jake)
    await settle()

    assert transport.calls_to("GET", "/articles/feed") == []


# =============================================================================
# Favoriting from the list
# =============================================================================

@pytest.fixture
def listed_home(session, articles, tags, actions, navigator, transport):
    transport.respond("GET", "/articles", make_article_list_dict([
        make_article_dict(slug="a", favorites_count=2),
        make_article_dict(slug="b", favorites_count=7),
    ]))
    view = HomeView(session, ArticleListQuery(articles, session, navigator), TagsSidebar(tags), actions)
    yield view
    view.close()


@pytest.mark.asyncio
async def test_favorite_from_list_patches_item_without_refetch(listed_home, signed_in, transport):
    transport.respond("POST", "/articles/a/favorite", {"article": make_article_dict(slug="a", favorited=True)})
    await listed_home.set_list_to(SelectionType.ALL)

    await listed_home.toggle_favorite("a")

    a, b = listed_home.query.results.value
    assert (a.favorited, a.favorites_count) == (True, 3)
    assert (b.favorited, b.favorites_count) == (False, 7)
    assert len(transport.calls_to("GET", "/articles")) == 1


@pytest.mark.asyncio
async def test_each_listed_article_has_its_own_guard(listed_home, signed_in, transport):
    pending_a = transport.defer("POST", "/articles/a/favorite")
    transport.respond("POST", "/articles/b/favorite", {"article": make_article_dict(slug="b", favorited=True)})
    await listed_home.set_list_to(SelectionType.ALL)

    first = asyncio.create_task(listed_home.toggle_favorite("a"))
    await asyncio.sleep(0)
    again = await listed_home.toggle_favorite("a")
    other = await listed_home.toggle_favorite("b")
    pending_a.set_result({"article": make_article_dict(slug="a", favorited=True)})
    await first

    assert again is None
    assert other.slug == "b"
    assert len(transport.calls_to("POST", "/articles/a/favorite")) == 1
    assert [a.favorites_count for a in listed_home.query.results.value] == [3, 8]


@pytest.mark.asyncio
async def test_anonymous_favorite_from_list_redirects(listed_home, navigator, transport):
    await listed_home.set_list_to(SelectionType.ALL)

    assert await listed_home.toggle_favorite("a") is None

    assert navigator.path == "/register"
    assert listed_home.query.results.value[0].favorites_count == 2


@pytest.mark.asyncio
async def test_tags_sidebar_loads(tags, transport):
    transport.respond("GET", "/tags", {"tags": ["dragons", "training"]})
    sidebar = TagsSidebar(tags)
    assert sidebar.loaded.value is False

    await sidebar.load()

    assert sidebar.tags.value == ("dragons", "training")
    assert sidebar.loaded.value is True


@pytest.mark.asyncio
async def test_tags_sidebar_empty_is_still_loaded(tags, transport):
    transport.respond("GET", "/tags", {"tags": []})
    sidebar = TagsSidebar(tags)
    await sidebar.load()
    assert sidebar.tags.value == ()
    assert sidebar.loaded.value is True
