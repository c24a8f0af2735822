"""Configuration management for the Shortly client."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class ClientConfig(BaseSettings):
    """Client configuration.

    All endpoint values are opaque constants fixed at start-up. Every
    component receives this object explicitly at construction.
    """

    # Backend endpoints
    shorten_url: str = Field(
        default="http://localhost:9200/api/shorten",
        description="Endpoint that accepts POSTed shorten requests",
    )

    history_url: str = Field(
        default="http://localhost:9200/api/user/",
        description="Prefix of the history endpoint; the encoded email is appended",
    )

    backend_base_url: str = Field(
        default="http://localhost:9200/",
        description="Public base URL that short-url fragments are appended to",
    )

    redirect_base_url: str = Field(
        default="http://localhost:9200/",
        description="Real backend URL that non-root client paths are forwarded to",
    )

    # Verification widget
    widget_site_key: str = Field(
        default="",
        description="Site key of the bot-verification widget",
    )

    # Identity provider
    firebase_api_key: Optional[str] = Field(
        default=None,
        description="Web API key for Firebase email/password sign-in",
    )

    # Request settings
    anonymous_email: str = Field(
        default="null",
        description="Requester email sent when no identity is present",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout in seconds for backend calls",
    )

    # Redirect server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the redirect app to",
    )

    port: int = Field(
        default=5173,
        description="Port the redirect app listens on",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)",
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs",
    )

    model_config = {
        "env_prefix": "SHORTLY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config(**overrides) -> ClientConfig:
    """Load configuration from environment, applying explicit overrides."""
    return ClientConfig(**overrides)
