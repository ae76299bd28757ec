# panda/cli/ui/progress.py
"""
Spinner for indeterminate work (scanning, verifying checksums).
"""

from __future__ import annotations

from rich.status import Status

from .console import console


class RichSpinner:
    """Rich spinner context manager."""

    def __init__(self, message: str):
        self.message = message
        self.status = None

    def __enter__(self):
        self.status = Status(self.message, console=console, spinner="dots")
        self.status.__enter__()
        return self

    def __exit__(self, *args):
        self.status.__exit__(*args)


class ProgressMixin:
    """Mixin providing progress methods for the UI class."""

    def spinner(self, message: str = "Working..."):
        """
        Create a spinner context manager.

        Usage:
            with ui.spinner("Verifying checksums..."):
                context = prepare_run(config)
        """
        return RichSpinner(message)
