"""Redirect web app for the Shortly client."""

from .app_factory import create_app

__all__ = ["create_app"]
