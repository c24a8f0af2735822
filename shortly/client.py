"""Client facade wiring session, submission and history together."""

import logging
from typing import Optional

from .api_client import ShortlyAPIClient
from .common.logging_config import bind_client_state
from .config import ClientConfig
from .errors import ValidationError
from .history import HistoryLoader
from .identity import IdentityProvider
from .models import SubmissionResult
from .session import SessionManager
from .state import ClientState
from .submission import SubmissionController
from .verification import VerificationWidget


class ShortlyClient:
    """One visitor's view of the shortener.

    Holds a single ``ClientState`` shared by the session manager, the
    submission controller and the history loader.
    """

    def __init__(
        self,
        config: ClientConfig,
        identity_provider: IdentityProvider,
        widget: VerificationWidget,
        api: Optional[ShortlyAPIClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration
            identity_provider: Provider used for login/logout
            widget: Bot-verification widget
            api: Optional backend client (built from config if omitted)
            logger: Optional logger
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.state = ClientState()
        bind_client_state(self.logger, self.state)
        self.api = api or ShortlyAPIClient(config, logger=self.logger)
        self.widget = widget
        self.history = HistoryLoader(self.api, self.state, logger=self.logger)
        self.session = SessionManager(
            identity_provider,
            self.state,
            self.history,
            widget,
            logger=self.logger,
        )
        self.submissions = SubmissionController(
            config,
            self.api,
            self.state,
            widget,
            self.history,
            logger=self.logger,
        )

    async def login(self) -> bool:
        return await self.session.login()

    async def logout(self) -> bool:
        return await self.session.logout()

    async def verify(self) -> bool:
        """Ask the widget for a fresh token and hold it for the next attempt.

        Returns:
            True if a token was obtained
        """
        try:
            value = await self.widget.request_token()
        except ValidationError as e:
            self.state.show_error(str(e))
            return False
        self.submissions.accept_token(value)
        return True

    async def shorten(self, source_url: Optional[str] = None) -> Optional[SubmissionResult]:
        """Submit the current input (or ``source_url``) with the held token."""
        if source_url is not None:
            self.submissions.set_source_url(source_url)
        return await self.submissions.submit(
            self.state.source_url,
            self.state.token,
            self.state.identity,
        )

    async def refresh_history(self) -> bool:
        return await self.history.load_history(self.state.identity)

    async def close(self) -> None:
        """Close backend connections."""
        await self.api.close()
