# panda/logging/logger.py
"""
Logger factory.

All panda modules obtain loggers through ``get_logger(__name__)``. Output is
routed through a single Rich handler on stderr so log lines never interleave
with the progress lines printed on stdout.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "panda"
LEVEL_ENV_VAR = "PANDA_LOG_LEVEL"

_configured = False


def _level_from_env(default: int) -> int:
    value = os.getenv(LEVEL_ENV_VAR)
    if not value:
        return default
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def configure_logging(verbose: bool = False) -> None:
    """
    Attach the Rich handler to the ``panda`` logger.

    Safe to call repeatedly; later calls only adjust the level.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = _level_from_env(logging.DEBUG if verbose else logging.WARNING)
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``panda`` hierarchy."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
