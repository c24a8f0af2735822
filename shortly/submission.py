"""Submission controller: validates, sends and classifies shorten requests."""

import logging
from typing import Optional

from .api_client import ShortlyAPIClient
from .config import ClientConfig
from .errors import SemanticRejection, TransientError
from .history import HistoryLoader
from .models import (
    ErrorKind,
    Failure,
    Identity,
    SubmissionRequest,
    SubmissionResult,
    Success,
    VerificationToken,
    is_authenticated,
)
from .state import ClientState
from .verification import VerificationWidget
from .common.url_builder import build_short_url
from .common.validators import check_source_url, check_token


class SubmissionController:
    """Drives one shorten attempt at a time.

    Lifecycle of an attempt::

        Idle -> Validating -> rejected (Idle + error)
                           -> Sending -> Idle + result | Idle + error

    Each attempt consumes exactly one verification token, whatever the
    outcome, and resets the widget afterwards so the next attempt needs a
    fresh one.
    """

    def __init__(
        self,
        config: ClientConfig,
        api: ShortlyAPIClient,
        state: ClientState,
        widget: VerificationWidget,
        history: HistoryLoader,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.api = api
        self.state = state
        self.widget = widget
        self.history = history
        self.logger = logger or logging.getLogger(__name__)

    def accept_token(self, value: str) -> VerificationToken:
        """Store a token the widget just issued."""
        token = VerificationToken(value=value)
        self.state.token = token
        return token

    def set_source_url(self, text: str) -> None:
        self.state.source_url = text

    async def submit(
        self,
        source_url: str,
        token: Optional[VerificationToken],
        identity: Identity,
    ) -> Optional[SubmissionResult]:
        """Run one shorten attempt.

        Args:
            source_url: URL typed by the visitor
            token: Verification token for this attempt
            identity: Current identity (``ANONYMOUS`` for visitors)

        Returns:
            The attempt's result, or None if another attempt is in flight or
            the session changed before the response arrived
        """
        if self.state.loading:
            self.logger.warning("Submission ignored: another request is in flight")
            return None

        for ok, message in (check_source_url(source_url), check_token(token)):
            if not ok:
                self.state.result_short_url = ""
                self.state.show_error(message)
                self.logger.info(f"Submission rejected locally: {message}")
                return Failure(kind=ErrorKind.VALIDATION, detail=message)

        self.state.loading = True
        self.state.error_message = ""
        self.state.result_short_url = ""
        epoch = self.state.epoch

        request = SubmissionRequest(
            source_url=source_url,
            requester_email=identity.email if is_authenticated(identity) else self.config.anonymous_email,
            token=token.consume(),
        )

        result: Optional[SubmissionResult] = None
        try:
            fragment = await self.api.shorten(request)
            result = Success(short_url=build_short_url(fragment, self.config.backend_base_url))
        except SemanticRejection as e:
            result = Failure(kind=ErrorKind.INVALID_INPUT, detail=e.reason)
            message = e.user_message()
        except TransientError as e:
            result = Failure(kind=ErrorKind.TRANSIENT, detail=e.detail)
            message = e.user_message()
        finally:
            # identity changes always advance the epoch
            current = self.state.is_current(epoch)
            if current:
                self.state.loading = False
                self.state.token = None
                self.widget.reset()

        if not current:
            self.logger.debug(f"Dropping stale submission outcome for {source_url}")
            return None

        if isinstance(result, Success):
            self.state.result_short_url = result.short_url
            self.logger.info(f"Shortened {source_url} -> {result.short_url}")
        else:
            self.state.show_error(message)
            self.logger.warning(f"Shorten failed ({result.kind.value}) for {source_url}: {result.detail}")

        if is_authenticated(identity):
            await self.history.load_history(identity)

        return result
