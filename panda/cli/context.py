# panda/cli/context.py
"""
Central CLI context - single source of truth for all CLI commands.

All configuration reading happens here. Commands import CLIContext and use it.

Usage:
    from panda.cli.context import CLIContext

    ctx = CLIContext.load()          # raises ConfigNotFoundError
    ctx = CLIContext.load_or_none()  # None if nothing stored yet
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from panda.config import PandaConfig, config_exists, load_config
from panda.core.exceptions import ConfigNotFoundError
from panda.core.paths import PandaPaths
from panda.logging.logger import get_logger
from panda.logging.tags import CLI

logger = get_logger(__name__)


@dataclass
class CLIContext:
    config: PandaConfig
    config_path: Path
    ledger_path: Path

    @property
    def policy_display(self) -> str:
        if self.config.subdirectory_mode is None or not self.config.subdirectories:
            return "all subdirectories"
        fragments = ", ".join(self.config.subdirectories)
        return f"{self.config.subdirectory_mode.value}: {fragments}"

    @property
    def options_display(self) -> str:
        return " ".join(self.config.pandoc_options) or "(none)"

    @classmethod
    def load(cls) -> "CLIContext":
        """
        Raises:
            ConfigNotFoundError: If no config file exists.
            ConfigError: If the config file is invalid.
        """
        ctx = cls.load_or_none()
        if ctx is None:
            raise ConfigNotFoundError("No configuration found. Run 'panda init' first.")
        return ctx

    @classmethod
    def load_or_none(cls) -> Optional["CLIContext"]:
        config_path = PandaPaths.config()
        if not config_exists(config_path):
            logger.debug(f"{CLI} No config at {config_path}")
            return None
        return cls(
            config=load_config(config_path),
            config_path=config_path,
            ledger_path=PandaPaths.ledger(),
        )
