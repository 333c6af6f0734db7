"""Sign-in and sign-up forms."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from conduit_client.actions import ConduitActions
from conduit_client.errors import ValidationFailed, format_errors
from conduit_client.mutations import Mutation
from conduit_client.protocols import Identity, NavigatorProtocol


class AuthMode(str, Enum):
    LOGIN = "login"
    REGISTER = "register"


class AuthView:
    def __init__(self, mode: AuthMode, actions: ConduitActions, navigator: NavigatorProtocol) -> None:
        self.mode = mode
        action = actions.login() if mode is AuthMode.LOGIN else actions.register()
        self.submission: Mutation[Identity] = action.then(lambda _: navigator.navigate("/"))

    @property
    def error_lines(self) -> List[str]:
        return format_errors(self.submission.errors.value)

    async def submit(self, email: str, password: str, username: Optional[str] = None) -> Optional[Identity]:
        """Returns the identity, or None when rejected (see ``error_lines``)."""
        try:
            if self.mode is AuthMode.REGISTER:
                if not username:
                    raise ValueError("username is required to register")
                return await self.submission.invoke(username, email, password)
            return await self.submission.invoke(email, password)
        except ValidationFailed:
            return None
