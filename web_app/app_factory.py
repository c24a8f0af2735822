"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI

from shortly.config import ClientConfig
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(
    config: ClientConfig,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """Create and configure the redirect app.

    Args:
        config: Configuration instance
        logger: Optional logger for request logging

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortly",
        description="Landing page and short-link redirects for the Shortly client",
        version="1.0.0",
        docs_url=None,
        openapi_url=None,
        redoc_url=None,
    )

    app.state.config = config

    app.add_middleware(LoggingMiddleware, logger=logger)

    app.include_router(web_router, tags=["Web"])

    return app
