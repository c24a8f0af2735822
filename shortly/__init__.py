"""Client-side orchestration for the Shortly URL shortener."""

from .config import ClientConfig, load_config
from .client import ShortlyClient
from .models import ANONYMOUS, Principal, VerificationToken, HistoryEntry, Success, Failure, ErrorKind
from .state import ClientState

__all__ = [
    "ClientConfig",
    "load_config",
    "ShortlyClient",
    "ANONYMOUS",
    "Principal",
    "VerificationToken",
    "HistoryEntry",
    "Success",
    "Failure",
    "ErrorKind",
    "ClientState",
]
