# panda/core/exceptions.py
"""
Exception hierarchy for panda.

Precondition and configuration errors abort a run before any document is
rendered. Render errors are contained per document by the executor and
never abort a batch.
"""

from __future__ import annotations

from typing import Iterable, List


class PandaError(Exception):
    """Base class for every error raised by panda."""


class ConfigError(PandaError):
    """Stored configuration is missing, unreadable or invalid."""


class ConfigNotFoundError(ConfigError):
    """No configuration has been stored in the workspace yet."""


class PreconditionError(PandaError):
    """
    A run cannot start.

    Carries every problem found so they can be reported together.
    """

    def __init__(self, problems: Iterable[str] | str) -> None:
        if isinstance(problems, str):
            problems = [problems]
        self.problems: List[str] = list(problems)
        super().__init__("; ".join(self.problems))


class DiscoveryError(PreconditionError):
    """The source directory does not exist or cannot be read."""


class LedgerError(PandaError):
    """The checksum ledger could not be written."""


class RenderError(PandaError):
    """A single document failed to render."""

    def __init__(self, source_path: str, message: str) -> None:
        self.source_path = source_path
        self.message = message
        super().__init__(f"{source_path}: {message}")
