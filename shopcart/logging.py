"""
Logging for shopcart.

Modules log through ``get_logger(__name__)``. ``configure_logging`` sets the
level of the ``shopcart`` logger and, when the host application has not set
up logging itself, attaches one stdout handler to it.
"""

import logging
import sys
from functools import cache

PACKAGE_LOGGER = "shopcart"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "shopcart.stdout"


def _resolve_level(level: str) -> int:
    value = logging.getLevelName(str(level).upper())
    # getLevelName returns "Level X" for unknown names
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Apply the configured level to the package logger.

    Args:
        level: Level name such as "DEBUG" or "warning"; unknown names mean INFO

    Returns:
        The ``shopcart`` logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_resolve_level(level))

    has_own_handler = any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers)
    if not has_own_handler and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger


@cache
def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module (typically __name__)."""
    return logging.getLogger(name)


def loggable_id(value: object, max_length: int = 12) -> str:
    """
    Render a product id for a log line.

    Ids come from catalog data, so control characters are escaped and long
    values are cut to ``max_length`` characters.
    """
    text = str(value).encode("unicode_escape").decode("ascii")
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
    "loggable_id",
]
