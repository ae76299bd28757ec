"""
Main panda CLI module.

Provides the top-level `panda` command.
"""

from panda.cli.cli import app

__all__ = ["app"]
