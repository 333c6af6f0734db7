"""Composition Root - build AppContext and wire dependencies.

This is the ONLY place where concrete implementations are instantiated
and wired together. Tests substitute any collaborator by passing it in.

Usage:
    ctx = create_app_context()
    await startup(ctx)
    ...
    await aclose(ctx)
"""

from typing import Optional

from conduit_client.actions import ConduitActions
from conduit_client.api import ArticlesApi, CommentsApi, ProfilesApi, TagsApi, UsersApi
from conduit_client.context import AppContext
from conduit_client.navigation import GuardedNavigator, HistoryNavigator
from conduit_client.protocols import (
    Identity,
    KeyValueStoreProtocol,
    LoggerProtocol,
    NavigatorProtocol,
    TransportProtocol,
)
from conduit_client.session import SessionStore
from conduit_client.settings import Settings, get_settings
from conduit_client.storage import create_storage
from conduit_client.transport import HttpTransport
from conduit_client.utils.logging import configure_logging, create_logger


def create_app_context(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[TransportProtocol] = None,
    storage: Optional[KeyValueStoreProtocol] = None,
    navigator: Optional[NavigatorProtocol] = None,
    logger: Optional[LoggerProtocol] = None,
) -> AppContext:
    """Create the AppContext.

    Args:
        settings: Pre-configured settings. Uses get_settings() if None.
        transport: Transport to use. An HttpTransport against
            ``settings.api_base_url`` if None.
        storage: Token store. Built from ``settings.storage_backend`` if None.
        navigator: Navigation sink. A route-guarded HistoryNavigator if None.
        logger: Root logger. A structlog logger if None.

    Returns:
        AppContext with all dependencies wired.
    """
    if settings is None:
        settings = get_settings()

    if logger is None:
        configure_logging(level=settings.log_level, json_output=settings.log_json)
        logger = create_logger("conduit")

    if storage is None:
        storage = create_storage(settings, logger=logger)

    session = SessionStore(storage, token_key=settings.token_key, logger=logger)

    history: Optional[HistoryNavigator] = None
    if navigator is None:
        history = HistoryNavigator(logger=logger)
        navigator = GuardedNavigator(history, session, logger=logger)

    if transport is None:
        transport = HttpTransport(
            settings.api_base_url,
            token_provider=session.get_token,
            timeout=settings.request_timeout,
            logger=logger,
        )

    users = UsersApi(transport)
    articles = ArticlesApi(transport)
    comments = CommentsApi(transport)
    profiles = ProfilesApi(transport)
    tags = TagsApi(transport)
    actions = ConduitActions(session, navigator, users, articles, comments, profiles, logger=logger)

    settings.log_config(logger)
    logger.info("app_context_created", storage_backend=settings.storage_backend)

    return AppContext(
        settings=settings,
        logger=logger,
        storage=storage,
        transport=transport,
        navigator=navigator,
        session=session,
        users=users,
        articles=articles,
        comments=comments,
        profiles=profiles,
        tags=tags,
        actions=actions,
        history=history,
    )


async def startup(ctx: AppContext) -> Optional[Identity]:
    """Restore the persisted session, if any."""
    return await ctx.session.restore(ctx.users)


async def aclose(ctx: AppContext) -> None:
    close = getattr(ctx.transport, "aclose", None)
    if close is not None:
        await close()
    ctx.logger.info("app_context_closed")


__all__ = ["create_app_context", "startup", "aclose"]
