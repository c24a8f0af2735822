"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Optional

from shortly.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request, its status, duration and any redirect target."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        location = response.headers.get("location")
        target = f" -> {location}" if location else ""
        self.logger.info(
            f"{request.method} {request.url.path} from {client_ip} - "
            f"Status: {response.status_code}{target} - Duration: {duration_ms:.2f}ms"
        )

        return response
