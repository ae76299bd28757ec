# panda/core/paths.py
"""
Workspace paths.

Everything panda persists lives in one workspace directory, ``./.panda`` by
default. Set ``PANDA_HOME`` to relocate it.
"""

from __future__ import annotations

import os
from pathlib import Path

WORKSPACE_ENV_VAR = "PANDA_HOME"
DEFAULT_WORKSPACE_NAME = ".panda"


class PandaPaths:
    """Resolves the locations of the workspace files."""

    @classmethod
    def workspace(cls) -> Path:
        override = os.getenv(WORKSPACE_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return Path.cwd() / DEFAULT_WORKSPACE_NAME

    @classmethod
    def config(cls) -> Path:
        """Stored run configuration."""
        return cls.workspace() / "config.yaml"

    @classmethod
    def ledger(cls) -> Path:
        """Checksum ledger, readable by ``sha256sum -c``."""
        return cls.workspace() / "sha256sum.txt"

    @classmethod
    def ensure_workspace(cls) -> Path:
        path = cls.workspace()
        path.mkdir(parents=True, exist_ok=True)
        return path


__all__ = ["PandaPaths", "WORKSPACE_ENV_VAR", "DEFAULT_WORKSPACE_NAME"]
