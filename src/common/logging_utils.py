"""Centralized logging helpers.

Every entry point calls configure_logging() once; library modules only create
module loggers and attach structured context through extra_context().
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONFIGURED_FLAG = "_moddeps_configured"

# LogRecord attributes that must not be overwritten through ``extra``.
_RESERVED_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def _level_from_env(default: int = logging.INFO) -> int:
    """Return the log level named by MODDEPS_LOG_LEVEL, or ``default``."""
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure the root logger once.

    The level comes from the MODDEPS_LOG_LEVEL environment variable. A second
    call only adjusts the level (and adds the file handler when a new file is
    given), so tests and nested entry points can call it freely.
    """
    root = logging.getLogger()
    level = _level_from_env()
    if not getattr(root, _CONFIGURED_FLAG, False):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
        setattr(root, _CONFIGURED_FLAG, True)
    root.setLevel(level)

    if log_file:
        target = os.path.abspath(log_file)
        for existing in root.handlers:
            if isinstance(existing, logging.FileHandler) and existing.baseFilename == target:
                return
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Cheap guard for building DEBUG payloads."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped and keys that clash with LogRecord attributes are
    prefixed with ``ctx_``.
    """
    context: Dict[str, Any] = {}
    for key, value in kwargs.items():
        if value is None:
            continue
        context[f"ctx_{key}" if key in _RESERVED_KEYS else key] = value
    return context


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; still running timers report time so far."""
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
