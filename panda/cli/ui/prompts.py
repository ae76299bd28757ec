# panda/cli/ui/prompts.py
"""
Prompt methods for user input.

Provides confirm, list, path and choice prompts.
"""

from __future__ import annotations

import shlex
from pathlib import Path

import typer
from rich.prompt import Confirm, Prompt

from .console import console


class PromptMixin:
    """Mixin providing prompt methods for the UI class."""

    def prompt_confirm(self, prompt: str, default: bool = True) -> bool:
        return Confirm.ask(prompt, default=default, console=console)

    def prompt_list(self, prompt: str) -> list[str]:
        """
        Prompt for a whitespace separated list.

        Shell quoting is honoured, so ``-V "mainfont=DejaVu Sans"`` yields
        two items.
        """
        response = Prompt.ask(prompt, default="", show_default=False, console=console)
        try:
            return shlex.split(response)
        except ValueError as e:
            self.error(f"Could not parse input: {e}")
            return self.prompt_list(prompt)

    def prompt_path(
        self,
        prompt: str,
        default: str = ".",
        must_exist: bool = True,
    ) -> Path:
        """Prompt for a path with optional validation."""
        while True:
            path_str = Prompt.ask(prompt, default=default, console=console)
            path = Path(path_str).expanduser().resolve()

            if not must_exist or path.exists():
                return path

            self.error(f"Path does not exist: {path}")
            if not self.prompt_confirm("Try again?", default=True):
                raise typer.Exit(1)

    def prompt_numbered_choice(self, prompt: str, choices: list[str], default: str = "") -> str:
        """
        Prompt for a numbered choice selection.

        The default option is always shown at position [1].
        """
        if not choices:
            return default
        if default not in choices:
            default = choices[0]

        ordered = [default] + [c for c in choices if c != default]

        console.print(f"  [bold]{prompt}:[/bold]")
        for i, choice in enumerate(ordered, 1):
            suffix = " [dim](default)[/dim]" if choice == default else ""
            console.print(f"    [cyan][{i}][/cyan] {choice}{suffix}")

        while True:
            response = Prompt.ask("  Choice", default="1", console=console)
            if response.isdigit() and 1 <= int(response) <= len(ordered):
                return ordered[int(response) - 1]
            if response in ordered:
                return response
            self.error(f"Enter a number between 1 and {len(ordered)}")
