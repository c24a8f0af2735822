"""URL composition helpers for short links, history keys and redirects."""

import base64


def build_short_url(fragment: str, base_url: str) -> str:
    """Compose the public short link from the backend base URL and the
    fragment the backend returned.

    Exactly one slash separates the two parts, so ``https://s.ly/`` and
    ``/abc123`` give ``https://s.ly/abc123``.

    Args:
        fragment: Short-url fragment returned by the backend (e.g. ``/abc123``)
        base_url: Public base URL of the backend

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    code = fragment.lstrip("/")

    if not base:
        return f"/{code}"
    return f"{base}/{code}"


def encode_history_key(email: str) -> str:
    """Opaque history key for an email: standard base64 of its UTF-8 bytes."""
    return base64.b64encode(email.encode("utf-8")).decode("ascii")


def build_history_url(history_url: str, email: str) -> str:
    """History endpoint for a user; the key is appended without a separator."""
    return f"{history_url}{encode_history_key(email)}"


def build_redirect_url(redirect_base_url: str, path: str) -> str:
    """Backend URL a non-root client path is forwarded to.

    The leading slash of the path is dropped and the remainder appended to
    the configured base, so ``/abc`` under ``https://api.s.ly/`` becomes
    ``https://api.s.ly/abc``.

    Args:
        redirect_base_url: Real backend URL that serves redirects
        path: Request path on the client's own origin

    Returns:
        Redirect target URL
    """
    return f"{redirect_base_url}{path.replace('/', '', 1)}"
