"""Local input checks performed before anything reaches the network."""

from typing import Optional, Tuple

EMPTY_URL_MESSAGE = "Please enter a valid URL."
MISSING_TOKEN_MESSAGE = "Please complete the CAPTCHA."


def is_blank(value: Optional[str]) -> bool:
    """True for None, the empty string and whitespace-only strings."""
    return value is None or not value.strip()


def check_source_url(source_url: Optional[str]) -> Tuple[bool, str]:
    """Validate the URL typed by the visitor.

    Only emptiness is checked locally; everything else is the backend's
    call (it answers 422 for URLs it rejects).

    Args:
        source_url: Text from the input box

    Returns:
        Tuple of (is_valid, error_message)
    """
    if is_blank(source_url):
        return False, EMPTY_URL_MESSAGE
    return True, ""


def check_token(token) -> Tuple[bool, str]:
    """Validate that a usable verification token is present.

    Args:
        token: VerificationToken or None

    Returns:
        Tuple of (is_valid, error_message)
    """
    if token is None or token.consumed or is_blank(token.value):
        return False, MISSING_TOKEN_MESSAGE
    return True, ""
