"""Bot-verification widget adapters."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from .errors import ValidationError
from .common.validators import MISSING_TOKEN_MESSAGE, is_blank

TokenPrompt = Callable[[str], Awaitable[str]]


class VerificationWidget(ABC):
    """A challenge widget that issues one-time tokens."""

    def __init__(self, site_key: str):
        self.site_key = site_key

    @abstractmethod
    async def request_token(self) -> str:
        """Complete a challenge and return a fresh token.

        Raises:
            ValidationError: If no token was produced
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Discard the current challenge so a new one must be completed."""
        pass


class PromptVerificationWidget(VerificationWidget):
    """Widget driven by an operator who pastes the challenge response token."""

    def __init__(self, site_key: str, prompt: TokenPrompt):
        super().__init__(site_key)
        self.prompt = prompt
        self.last_token: Optional[str] = None
        self.resets = 0

    async def request_token(self) -> str:
        token = (await self.prompt(self.site_key)).strip()
        if is_blank(token):
            raise ValidationError(MISSING_TOKEN_MESSAGE)
        self.last_token = token
        return token

    def reset(self) -> None:
        self.last_token = None
        self.resets += 1
