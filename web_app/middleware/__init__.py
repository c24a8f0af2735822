"""Middleware for the Shortly redirect app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
