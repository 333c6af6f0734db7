"""SessionStore - single source of truth for the current user.

The store is built once by the composition root and passed to every
consumer. It is the only component that reads or writes the persisted
token.

    set_auth(identity) -> token persisted, identity published
    purge()            -> token removed, absence published

``current_identity`` publishes distinct identities only;
``is_authenticated`` is derived from it and re-emits only on
present/absent transitions.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from conduit_client.errors import AuthorizationError, ConduitClientError
from conduit_client.protocols import (
    Identity,
    KeyValueStoreProtocol,
    LoggerProtocol,
    NavigatorProtocol,
)
from conduit_client.state import StateCell
from conduit_client.utils.logging import get_component_logger

if TYPE_CHECKING:
    from conduit_client.api import UsersApi

DEFAULT_TOKEN_KEY = "jwtToken"


class SessionStore:
    """Owns the current Identity and its persisted token."""

    def __init__(
        self,
        storage: KeyValueStoreProtocol,
        *,
        token_key: str = DEFAULT_TOKEN_KEY,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._storage = storage
        self._token_key = token_key
        self._logger = get_component_logger("SessionStore", logger)
        self.current_identity: StateCell[Optional[Identity]] = StateCell(
            None, name="current_identity", logger=self._logger
        )
        self.is_authenticated: StateCell[bool] = self.current_identity.map(
            lambda identity: identity is not None, name="is_authenticated"
        )

    @property
    def identity(self) -> Optional[Identity]:
        return self.current_identity.value

    @property
    def authenticated(self) -> bool:
        return self.is_authenticated.value

    @property
    def token_key(self) -> str:
        return self._token_key

    def get_token(self) -> Optional[str]:
        return self._storage.get(self._token_key)

    def set_auth(self, identity: Identity) -> None:
        """Persist the identity's token and publish the identity."""
        if not identity.token:
            # Profile updates may omit the token; keep the one we hold
            identity = replace(identity, token=self.get_token() or "")
        self._storage.set(self._token_key, identity.token)
        if self.current_identity.set(identity):
            self._logger.info("session_auth_set", username=identity.username)

    def purge(self) -> None:
        """Remove the persisted token and publish absence. Idempotent."""
        self._storage.remove(self._token_key)
        if self.current_identity.set(None):
            self._logger.info("session_purged")

    def logout(self, navigator: NavigatorProtocol) -> None:
        self.purge()
        navigator.navigate("/")

    async def revalidate(self, users: "UsersApi") -> Optional[Identity]:
        """Refresh the identity from ``GET /user``; any failure purges."""
        try:
            identity = await users.current()
        except AuthorizationError as e:
            self._logger.info("session_expired", status=e.status)
            self.purge()
            return None
        except ConduitClientError as e:
            self._logger.warning("session_revalidation_failed", error=str(e))
            self.purge()
            return None
        self.set_auth(identity)
        return identity

    async def restore(self, users: "UsersApi") -> Optional[Identity]:
        """Revalidate at startup, only when a token was persisted."""
        if not self.get_token():
            self._logger.debug("session_restore_skipped")
            return None
        return await self.revalidate(users)


__all__ = ["SessionStore", "DEFAULT_TOKEN_KEY"]
