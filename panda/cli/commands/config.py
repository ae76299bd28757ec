# panda/cli/commands/config.py
"""
Config command.

Prints the stored configuration.
"""

from __future__ import annotations

import typer

from panda.cli.context import CLIContext
from panda.cli.ui import ui
from panda.core.exceptions import ConfigError


def command(raw: bool = False) -> None:
    """
    Show the stored configuration.

    Args:
        raw: Print the YAML file as stored instead of a summary table.
    """
    try:
        ctx = CLIContext.load()
    except ConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    if raw:
        ui.syntax(ctx.config_path.read_text(encoding="utf-8"))
        return

    config = ctx.config
    ui.header("panda config", str(ctx.config_path))
    ui.table(
        ["Setting", "Value"],
        [
            ["Source directory", config.source_directory or "(not set)"],
            ["Target directory", config.target_directory or "(not set)"],
            ["Pandoc options", ctx.options_display],
            ["Subdirectories", ctx.policy_display],
            ["Extensions", " ".join(config.extensions)],
            ["Renderer", f"{config.pandoc_path} --pdf-engine={config.pdf_engine}"],
            ["Ledger", str(ctx.ledger_path)],
        ],
    )
