# panda/core/__init__.py
"""Core primitives shared by every panda package."""

from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    DiscoveryError,
    LedgerError,
    PandaError,
    PreconditionError,
    RenderError,
)
from .paths import PandaPaths

__all__ = [
    "PandaPaths",
    "PandaError",
    "ConfigError",
    "ConfigNotFoundError",
    "PreconditionError",
    "DiscoveryError",
    "LedgerError",
    "RenderError",
]
