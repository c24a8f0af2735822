#!/usr/bin/env python3
"""
Entry point for the Shortly redirect app.

Serves the landing page at ``/`` and forwards every other path to the real
backend so short links on the client's own origin keep working.

Usage:
    python app.py

Environment variables:
    SHORTLY_REDIRECT_BASE_URL - Backend URL short paths are forwarded to
    SHORTLY_HOST - Host to bind to
    SHORTLY_PORT - Port to listen on
    SHORTLY_LOG_LEVEL - Logging level
"""

import signal
import sys
from typing import Optional

import uvicorn

from shortly.config import ClientConfig, load_config
from shortly.common.logging_config import setup_logging
from web_app import create_app


def serve(config: Optional[ClientConfig] = None):
    """Run the redirect app until interrupted."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Shortly redirect app")
    logger.info(f"Forwarding short paths to {config.redirect_base_url}")

    app = create_app(config, logger=logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


def main():
    """Main entry point."""
    serve()


if __name__ == "__main__":
    main()
