"""
Logging utilities for edition-fixer.

Diagnostic output (what the tool is doing, which cargo command it runs,
why a crate was skipped) goes through the ``edition_fixer`` logger
hierarchy configured here. Report output for the user goes through
:mod:`edition_fixer.utils.console` instead.

Verbosity mapping used by the CLI:

- no flag -> ``WARNING``
- ``-v``  -> ``INFO``
- ``-vv`` -> ``DEBUG`` with timestamps and logger names
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from edition_fixer.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "edition_fixer"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if not (color and self.use_color and _stderr_supports_color()):
            return super().format(record)

        # Restore the level name so other handlers see the plain value
        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _stderr_supports_color() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stderr.isatty()
    except (AttributeError, OSError):
        return False


def level_for_verbosity(verbose: int) -> int:
    """Translate a ``-v`` count into a logging level."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    *,
    level: int = logging.WARNING,
    verbose: Optional[bool] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Attach a single stream handler to the ``edition_fixer`` logger.

    Calling this again replaces the previous handler, so repeated CLI
    invocations in one process (tests) never duplicate output.

    Args:
        level: Logging level for the package logger.
        verbose: Use the timestamped format. Defaults to ``True`` when
            ``level`` is ``DEBUG``.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    if verbose is None:
        verbose = level <= logging.DEBUG

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(
            ColoredFormatter(
                LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                use_color=not os.environ.get("NO_COLOR"),
            )
        )

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the ``edition_fixer`` hierarchy.

    ``get_logger("core.fixer")`` and ``get_logger("edition_fixer.core.fixer")``
    return the same logger.
    """
    if not name or name == ROOT_LOGGER_NAME:
        qualified = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        qualified = name
    else:
        qualified = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(qualified)

    # Library use without setup_logging() must stay silent
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True once :func:`setup_logging` has run."""
    return _logging_configured
