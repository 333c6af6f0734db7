"""Account settings form."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Optional

from conduit_client.actions import ConduitActions
from conduit_client.api import UsersApi
from conduit_client.errors import ValidationFailed, format_errors
from conduit_client.navigation import profile_path
from conduit_client.protocols import Identity, NavigatorProtocol
from conduit_client.session import SessionStore


@dataclass
class SettingsForm:
    image: str = ""
    username: str = ""
    bio: str = ""
    email: str = ""
    password: str = ""

    @classmethod
    def from_identity(cls, identity: Identity) -> "SettingsForm":
        return cls(
            image=identity.image or "",
            username=identity.username,
            bio=identity.bio or "",
            email=identity.email,
        )


class SettingsView:
    def __init__(
        self,
        session: SessionStore,
        users: UsersApi,
        actions: ConduitActions,
        navigator: NavigatorProtocol,
    ) -> None:
        self._session = session
        self._users = users
        self._navigator = navigator
        self.form = SettingsForm()
        self.update_action = actions.update_user().then(
            lambda identity: navigator.navigate(profile_path(identity.username))
        )

    @property
    def error_lines(self) -> List[str]:
        return format_errors(self.update_action.errors.value)

    async def load(self) -> Optional[Identity]:
        """Fill the form from a freshly revalidated identity."""
        identity = await self._session.revalidate(self._users)
        if identity is not None:
            self.form = SettingsForm.from_identity(identity)
        return identity

    async def submit(self) -> Optional[Identity]:
        try:
            return await self.update_action.invoke(asdict(self.form))
        except ValidationFailed:
            return None

    def logout(self) -> None:
        self._session.logout(self._navigator)
