from __future__ import annotations

"""
Logging Configuration Models.

Defines the settings used to attach the package log handlers and the
mapping from persisted level names to numeric severities.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

PACKAGE_LOGGER_NAME = "hierselect"

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Where and how verbosely the package logs.

    Handlers are attached to `logger_name` only, so a host that embeds the
    selection core keeps full control of its own root logger.

    Attributes:
        level: Minimum severity level (as stored in 'app_settings.log_level').
        console: Flag to enable stderr stream output.
        log_file: Optional absolute path of the rotating diagnostic log.
        logger_name: Logger receiving the handlers.
        max_bytes: Maximum size per log segment before rotation.
        backup_count: Number of historical log segments to preserve.
        console_fmt: Format for terminal output.
        file_fmt: Format for file entries.
        datefmt: Timestamp format.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    logger_name: str = PACKAGE_LOGGER_NAME

    max_bytes: int = 512 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
