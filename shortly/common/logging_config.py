"""Logging configuration for the Shortly client.

Every record written through the ``shortly`` handlers carries the session it
belongs to: the signed-in user (or ``anonymous``) and the state epoch. Bind a
``ClientState`` with ``bind_client_state`` to fill them in.
"""

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(user)s#%(epoch)s] - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "user": "%(user)s", "epoch": "%(epoch)s", '
    '"message": "%(message)s"}'
)


class ClientContextFilter(logging.Filter):
    """Stamps records with the user and epoch of the bound client state."""

    def __init__(self, state=None):
        super().__init__()
        self.state = state

    def filter(self, record: logging.LogRecord) -> bool:
        state = self.state
        if state is None:
            record.user = "-"
            record.epoch = "-"
        else:
            record.user = state.identity.email if state.identity else "anonymous"
            record.epoch = state.epoch
        return True


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("shortly")
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    if json_format:
        formatter = logging.Formatter(JSON_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    # one filter shared by all handlers so a single bind covers them
    context = ClientContextFilter()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        handler.addFilter(context)
        logger.addHandler(handler)

    return logger


def bind_client_state(logger: logging.Logger, state) -> None:
    """Point the context filters reachable from ``logger`` at ``state``.

    Walks up the hierarchy the same way propagation does, so a child of the
    ``shortly`` logger binds the handlers installed by ``setup_logging``.
    """
    current = logger
    while current is not None:
        for handler in current.handlers:
            for flt in handler.filters:
                if isinstance(flt, ClientContextFilter):
                    flt.state = state
        if not current.propagate:
            break
        current = current.parent


def get_logger(name: str = "shortly") -> logging.Logger:
    """Get a logger under the shortly hierarchy."""
    if name != "shortly" and not name.startswith("shortly."):
        name = f"shortly.{name}"
    return logging.getLogger(name)
