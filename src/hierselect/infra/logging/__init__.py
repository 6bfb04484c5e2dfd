from __future__ import annotations

from .config import PACKAGE_LOGGER_NAME, LoggingConfig
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_default_log_path,
    get_logger,
    shutdown_logging,
)
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "LoggingConfig",
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "get_default_log_path",
]
