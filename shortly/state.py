"""Shared client state for the session, submission and history components."""

from dataclasses import dataclass, field
from typing import List, Optional

from .models import ANONYMOUS, HistoryEntry, Identity, VerificationToken


@dataclass
class ClientState:
    """Everything the page shows, owned jointly by the three components.

    ``epoch`` advances whenever the identity changes (login, logout). A
    request records the epoch it was dispatched under and its outcome is
    applied only if the epoch is still current.
    """

    identity: Identity = ANONYMOUS
    source_url: str = ""
    result_short_url: str = ""
    error_message: str = ""
    loading: bool = False
    token: Optional[VerificationToken] = None
    history: List[HistoryEntry] = field(default_factory=list)
    epoch: int = 0

    def reset(self) -> None:
        """Return every field to its initial value and start a new epoch."""
        self.identity = ANONYMOUS
        self.source_url = ""
        self.result_short_url = ""
        self.error_message = ""
        self.loading = False
        self.token = None
        self.history = []
        self.epoch += 1

    def begin_epoch(self) -> int:
        """Abandon requests dispatched so far; their outcomes will be dropped."""
        self.epoch += 1
        self.loading = False
        return self.epoch

    def is_current(self, epoch: int, identity: Optional[Identity] = None) -> bool:
        """True if a request dispatched under ``epoch`` (and ``identity``) may still apply."""
        if epoch != self.epoch:
            return False
        return identity is None or identity == self.identity

    def show_error(self, message: str) -> None:
        """Replace the single visible error slot."""
        self.error_message = message

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "identity": self.identity.to_dict() if self.identity else None,
            "source_url": self.source_url,
            "result_short_url": self.result_short_url,
            "error_message": self.error_message,
            "loading": self.loading,
            "has_token": self.token is not None and not self.token.consumed,
            "history": [entry.to_dict() for entry in self.history],
        }
