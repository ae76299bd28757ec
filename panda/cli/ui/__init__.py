# panda/cli/ui/__init__.py
"""
CLI UI components.

Usage:
    from panda.cli.ui import ui

    ui.header("panda run")
    ui.success("Done!")
    source = ui.prompt_path("Source directory")
"""

from __future__ import annotations

from .console import console
from .output import OutputMixin
from .progress import ProgressMixin
from .prompts import PromptMixin


class UI(OutputMixin, PromptMixin, ProgressMixin):
    """Single entry point for terminal output and prompts."""


ui = UI()

__all__ = ["UI", "ui", "console"]
