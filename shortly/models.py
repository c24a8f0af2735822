"""Data models for the Shortly client."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .common.url_builder import build_short_url


@dataclass(frozen=True)
class Principal:
    """An authenticated identity."""

    email: str
    display_name: str = ""
    avatar_url: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "email": self.email,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
        }


class Absent:
    """No authenticated identity. Use the ``ANONYMOUS`` singleton."""

    _instance: Optional["Absent"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANONYMOUS"

    def __bool__(self) -> bool:
        return False


ANONYMOUS = Absent()

Identity = Union[Principal, Absent]


def is_authenticated(identity: Identity) -> bool:
    return isinstance(identity, Principal)


@dataclass
class VerificationToken:
    """One-time bot-verification credential. Valid for a single submission."""

    value: str
    consumed: bool = False

    def consume(self) -> str:
        """Mark the token used and return its value.

        Raises:
            ValueError: If the token was already consumed
        """
        if self.consumed:
            raise ValueError("Verification token already consumed")
        self.consumed = True
        return self.value


@dataclass(frozen=True)
class SubmissionRequest:
    """One outbound shorten call."""

    source_url: str
    requester_email: str
    token: str

    def to_payload(self) -> dict:
        """Wire body for the shorten endpoint."""
        return {
            "source_url": self.source_url,
            "email": self.requester_email,
            "captcha_token": self.token,
        }


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_INPUT = "invalid_input"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class Success:
    short_url: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    detail: str

    @property
    def ok(self) -> bool:
        return False


SubmissionResult = Union[Success, Failure]


@dataclass(frozen=True)
class HistoryEntry:
    """A previously shortened URL pair owned by the signed-in user."""

    original_url: str
    short_url: str

    def link(self, base_url: str) -> str:
        """Clickable short link for this entry."""
        return build_short_url(self.short_url, base_url)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "original_url": self.original_url,
            "short_url": self.short_url,
        }
