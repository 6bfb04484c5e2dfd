from __future__ import annotations

"""
Logging Handlers.

Handler factories for the package logger. Every handler built here is
tagged, so reconfiguration removes exactly what this package installed.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

_HANDLER_TAG_ATTR: str = "_hierselect_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


class _CurrentStderrHandler(logging.StreamHandler):
    """
    Stream handler writing to whatever `sys.stderr` is at emit time.

    Replaced or captured stderr streams (test runners, host redirection)
    keep receiving records after configuration.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    handler = _CurrentStderrHandler()
    handler.setLevel(level_int)
    handler.setFormatter(formatter)
    _tag_handler(handler)
    return handler


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the diagnostic log file, creating its directory when needed.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Record formatter for file entries.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
                                       cannot be opened (reported on stderr).
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
