"""Common utilities for the Shortly client."""

from .validators import check_source_url, check_token, is_blank
from .url_builder import (
    build_short_url,
    build_history_url,
    build_redirect_url,
    encode_history_key,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "check_source_url",
    "check_token",
    "is_blank",
    "build_short_url",
    "build_history_url",
    "build_redirect_url",
    "encode_history_key",
    "setup_logging",
    "get_logger",
]
