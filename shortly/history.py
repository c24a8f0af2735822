"""History loader: fetches the signed-in user's past short URLs."""

import logging
from typing import Optional

from .api_client import ShortlyAPIClient
from .errors import HISTORY_FAILED_MESSAGE, TransientError
from .models import Identity, is_authenticated
from .state import ClientState


class HistoryLoader:
    """Loads history for the current identity into shared state."""

    def __init__(
        self,
        api: ShortlyAPIClient,
        state: ClientState,
        logger: Optional[logging.Logger] = None,
    ):
        self.api = api
        self.state = state
        self.logger = logger or logging.getLogger(__name__)

    async def load_history(self, identity: Identity) -> bool:
        """Replace the history list with the backend's listing for ``identity``.

        No-op for an anonymous identity. On failure the previous list is
        kept and the error slot shows a retry hint; there is no automatic
        retry. A response that arrives after the session changed is dropped.

        Args:
            identity: Identity whose history to load

        Returns:
            True if the history list was replaced
        """
        if not is_authenticated(identity):
            return False

        epoch = self.state.epoch
        try:
            entries = await self.api.fetch_history(identity.email)
        except TransientError as e:
            if not self.state.is_current(epoch, identity):
                self.logger.debug(f"Dropping stale history failure for {identity.email}")
                return False
            self.logger.warning(f"Error fetching user URLs for {identity.email}: {e}")
            self.state.show_error(HISTORY_FAILED_MESSAGE)
            return False

        if not self.state.is_current(epoch, identity):
            self.logger.debug(f"Dropping stale history for {identity.email}")
            return False

        self.state.history = entries
        self.logger.info(f"Loaded {len(entries)} history entries for {identity.email}")
        return True
