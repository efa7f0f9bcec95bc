"""
Logging configuration — one-time setup for the ferry CLI.

Every module logs through ``logging.getLogger(__name__)``; nothing below
``ferry.core`` configures handlers itself.

Level precedence:
    --debug / --verbose / --quiet  >  FERRY_LOG_LEVEL  >  WARNING

A second, usually more detailed, sink can be added with FERRY_LOG_FILE
(and FERRY_LOG_FILE_LEVEL).  Console output goes to stderr so command
output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping

LEVEL_ENV = "FERRY_LOG_LEVEL"
FILE_ENV = "FERRY_LOG_FILE"
FILE_LEVEL_ENV = "FERRY_LOG_FILE_LEVEL"

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")

# console format by the most verbose level it must show
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = ("%(message)s", None)

_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, falling back to the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers with ferry's console (and file) sinks.

    Args:
        level: Console level name.
        log_file: Optional path of an append-mode log file.
        log_file_level: Level for the file sink (default: ``level``).
        quiet_third_party: Pin noisy library loggers to WARNING unless
            the console runs at DEBUG.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_from_env(
    level: str,
    quiet_third_party: bool = True,
    environ: Mapping[str, str] | None = None,
) -> None:
    """``setup_logging`` with the file sink taken from FERRY_LOG_FILE*."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=level,
        log_file=env.get(FILE_ENV) or None,
        log_file_level=env.get(FILE_LEVEL_ENV) or None,
        quiet_third_party=quiet_third_party,
    )


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT
    for threshold, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    fmt, datefmt = _FILE_FORMAT
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
