"""Logging for configwatch.

All modules log through children of the ``configwatch`` logger
(``get_logger("watcher")`` -> ``configwatch.watcher``). Nothing is emitted
until ``setup_logging`` attaches handlers:

- a file, from ``logging.file`` in settings or ``CONFIGWATCH_LOG``
- otherwise stderr, but only when stderr is a terminal

Two extra levels sit around the standard ones: VERBOSE (15) for per-scan
summaries and TRACE (5) for per-entry decisions.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from configwatch.config.schema import LoggingConfig

TRACE = 5
VERBOSE = 15

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("configwatch")

LOG_ENV_VAR = "CONFIGWATCH_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_initialized = False

_LEVEL_NAMES = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "VERBOSE": VERBOSE,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Index is the -v count / logging.verbose value; anything higher is TRACE
_VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, VERBOSE, TRACE)


class _LowercaseLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        return super().format(record)


def resolve_level(config: LoggingConfig | None) -> int:
    """Pick the effective log level for a logging config.

    ``verbose`` takes precedence over ``level``. Unknown names fall back
    to INFO.
    """
    if config is None:
        return logging.INFO
    if config.verbose is not None:
        if 0 <= config.verbose < len(_VERBOSITY_LEVELS):
            return _VERBOSITY_LEVELS[config.verbose]
        return TRACE
    if config.level:
        return _LEVEL_NAMES.get(config.level.upper(), logging.INFO)
    return logging.INFO


def resolve_log_file(config: LoggingConfig | None) -> str | None:
    """Log file from settings, else from ``CONFIGWATCH_LOG``, with ``~`` expanded."""
    path = config.file if config and config.file else os.environ.get(LOG_ENV_VAR)
    return os.path.expanduser(path) if path else None


def _file_handler(path: str) -> logging.Handler | None:
    try:
        return logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as e:
        if sys.stderr.isatty():
            print(f"[configwatch] Failed to open log file {path}: {e}", file=sys.stderr)
        return None


def _stderr_handler() -> logging.Handler | None:
    # Pipes (service managers, IDE runners) get no output unless a file is set
    if not sys.stderr.isatty():
        return None
    return logging.StreamHandler(sys.stderr)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Attach handlers to the ``configwatch`` logger.

    Only the first call has an effect; use ``reset_logging`` to start over.
    If the log file cannot be opened, stderr is used when it is a terminal.

    Args:
        config: Level, verbosity and file settings. None means INFO with
            the file taken from the environment.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = resolve_level(config)
    logger.setLevel(level)

    log_file = resolve_log_file(config)
    handler = _file_handler(log_file) if log_file else None
    if handler is None:
        handler = _stderr_handler()
    if handler is None:
        return

    handler.setLevel(level)
    handler.setFormatter(_LowercaseLevelFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)


def reset_logging() -> None:
    """Drop handlers installed by setup_logging so it can run again."""
    global _initialized
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    _initialized = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``configwatch.<name>``, or the package logger for no name."""
    if name:
        return logger.getChild(name)
    return logger
