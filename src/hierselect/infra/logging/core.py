from __future__ import annotations

"""
Logging Core Orchestrator.

Attaches the package handlers to the 'hierselect' logger behind a queue,
so file writes happen on a background listener thread instead of inside
the handling of a user action. Configuration is idempotent per logger.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from hierselect.infra.fs import get_user_data_dir
from hierselect.infra.logging.config import _LEVEL_MAP, PACKAGE_LOGGER_NAME, LoggingConfig
from hierselect.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_hierselect_configured"
_QUEUE_LISTENER_ATTR: str = "_hierselect_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "hierselect.log") -> str:
    """
    Location used by `--log-file` when no path is given.

    Returns:
        str: '<user data dir>/logs/<file_name>'.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach console and file handlers to the package logger.

    Repeated calls are no-ops unless `force` is set, in which case the
    handlers and listener installed by the previous call are torn down.
    The root logger is never modified.

    Args:
        cfg: Logging destinations and verbosity.
        force: If True, re-initialize handlers even if already configured.

    Returns:
        logging.Logger: The configured package logger.
    """
    target = logging.getLogger(cfg.logger_name)

    if getattr(target, _CONFIGURED_FLAG_ATTR, False) and not force:
        return target

    level_int = _parse_level(cfg.level)
    target.setLevel(level_int)

    _remove_our_handlers(target)
    _stop_existing_listener(target)

    handlers_list: List[logging.Handler] = []
    if cfg.console:
        handlers_list.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers_list.append(fh)

    setattr(target, _CONFIGURED_FLAG_ATTR, True)
    if not handlers_list:
        return target

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()
    target.addHandler(queue_handler)
    setattr(target, _QUEUE_LISTENER_ATTR, listener)

    # Flush pending records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)

    return target


def shutdown_logging(logger_name: str = PACKAGE_LOGGER_NAME) -> None:
    """
    Drain the queue and detach the package handlers.

    Safe to call when logging was never configured.
    """
    target = logging.getLogger(logger_name)
    _stop_existing_listener(target)
    _remove_our_handlers(target)
    target.setLevel(logging.NOTSET)
    if hasattr(target, _CONFIGURED_FLAG_ATTR):
        delattr(target, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (usually called with __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(target: logging.Logger) -> None:
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()


def _stop_existing_listener(target: logging.Logger) -> None:
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener, tolerating listeners that were already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
