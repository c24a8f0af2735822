"""Session manager: login, logout and identity changes."""

import logging
from typing import Optional

from .errors import AuthError, LOGIN_FAILED_MESSAGE, LOGOUT_FAILED_MESSAGE
from .history import HistoryLoader
from .identity import IdentityProvider
from .models import Identity, is_authenticated
from .state import ClientState
from .verification import VerificationWidget


class SessionManager:
    """Owns the identity held in ``ClientState``."""

    def __init__(
        self,
        provider: IdentityProvider,
        state: ClientState,
        history: HistoryLoader,
        widget: VerificationWidget,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.state = state
        self.history = history
        self.widget = widget
        self.logger = logger or logging.getLogger(__name__)

    @property
    def identity(self) -> Identity:
        return self.state.identity

    async def login(self) -> bool:
        """Run the provider handshake and load the new identity's history.

        Returns:
            True if an identity is now present
        """
        epoch = self.state.epoch
        try:
            principal = await self.provider.sign_in()
        except AuthError as e:
            self.logger.error(f"Login Error: {e}")
            if self.state.is_current(epoch):
                self.state.show_error(LOGIN_FAILED_MESSAGE)
            return False

        if not self.state.is_current(epoch):
            self.logger.debug(f"Dropping stale login for {principal.email}")
            return False

        self.logger.info(f"Signed in as {principal.email}")
        await self.set_identity(principal)
        return True

    async def logout(self) -> bool:
        """Sign out and reset all state derived from the session.

        The local reset happens even when the provider call fails, so data
        from the previous user is never left on screen.

        Returns:
            True if the provider sign-out succeeded
        """
        previous = self.state.identity
        failure: Optional[AuthError] = None
        try:
            await self.provider.sign_out()
        except AuthError as e:
            failure = e

        self.state.reset()
        self.widget.reset()

        if failure is not None:
            self.logger.error(f"Logout Error: {failure}")
            self.state.show_error(LOGOUT_FAILED_MESSAGE)
            return False

        if is_authenticated(previous):
            self.logger.info(f"Signed out {previous.email}")
        return True

    async def set_identity(self, identity: Identity) -> None:
        """Apply an identity change and load history when signed in."""
        if identity == self.state.identity:
            return
        abandoned = self.state.loading
        self.state.identity = identity
        self.state.begin_epoch()
        if abandoned:
            # the in-flight attempt already consumed its token
            self.state.token = None
            self.widget.reset()
        if is_authenticated(identity):
            await self.history.load_history(identity)
