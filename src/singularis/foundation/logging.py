"""Logging setup shared by the CLI and the HTTP server.

Level resolution, highest priority first:
    1. explicit ``level`` argument
    2. SINGULARIS_LOG_LEVEL (DEBUG, INFO, WARNING, ... or a number)
    3. SINGULARIS_DEBUG=true
    4. ``debug=True`` (the CLI's --debug flag)
    5. WARNING

Usage:
    from singularis.foundation.logging import configure_logging
    configure_logging(debug=True)
"""

import logging
import os
import sys
from typing import TextIO

DEBUG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
DEFAULT_FORMAT = "%(name)s: %(message)s"

# Kept at WARNING even with --debug
QUIET_LOGGERS = (
    "asyncio",
    "httpcore",
    "httpx",
    "markdown_it",
    "uvicorn.access",
)

_TRUTHY = ("1", "true", "yes", "on")


def resolve_level(*, debug: bool = False, level: int | str | None = None) -> int:
    """Work out the effective level from arguments and SINGULARIS_* env vars."""
    if level is not None:
        return _parse_level(level)
    if env_level := os.environ.get("SINGULARIS_LOG_LEVEL"):
        return _parse_level(env_level)
    if debug or os.environ.get("SINGULARIS_DEBUG", "").lower() in _TRUTHY:
        return logging.DEBUG
    return logging.WARNING


def configure_logging(
    *,
    debug: bool = False,
    level: int | str | None = None,
    stream: TextIO | None = None,
) -> int:
    """Install a single stream handler on the root logger.

    Returns:
        The level that was applied.
    """
    resolved = resolve_level(debug=debug, level=level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(DEBUG_FORMAT if resolved <= logging.DEBUG else DEFAULT_FORMAT)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging at %s", logging.getLevelName(resolved))
    return resolved


def uvicorn_log_level(level: int) -> str:
    """Map a logging level to the name uvicorn.run() expects."""
    if level <= logging.DEBUG:
        return "debug"
    if level <= logging.INFO:
        return "info"
    if level <= logging.WARNING:
        return "warning"
    return "error"


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if isinstance(numeric, int):
        return numeric
    try:
        return int(level)
    except ValueError:
        return logging.WARNING
