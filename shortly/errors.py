"""Error taxonomy for the Shortly client."""

from typing import Optional

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
LOGIN_FAILED_MESSAGE = "Login failed. Please try again."
LOGOUT_FAILED_MESSAGE = "Logout failed. Please try again."
HISTORY_FAILED_MESSAGE = "Failed to fetch user URLs. Please try again later."


class ShortlyError(Exception):
    """Base class for recoverable client errors."""

    def user_message(self) -> str:
        return str(self)


class ValidationError(ShortlyError):
    """Local precondition failure. Never reaches the network."""


class SemanticRejection(ShortlyError):
    """The backend judged the submitted URL invalid (HTTP 422)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def user_message(self) -> str:
        return f"Invalid URL: {self.reason}"


class TransientError(ShortlyError):
    """Network failure, timeout or any unexpected HTTP status."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def user_message(self) -> str:
        return UNEXPECTED_ERROR_MESSAGE


class AuthError(ShortlyError):
    """Login or logout against the identity provider failed."""
