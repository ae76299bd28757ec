# panda/cli/commands/init.py
"""
Init command.

Interactively captures the source and target directories, pandoc options
and subdirectory filter, and stores them in the workspace.
"""

from __future__ import annotations

import typer

from panda.cli.ui import ui
from panda.config import PandaConfig, SubdirectoryMode, config_exists, save_config
from panda.core.paths import PandaPaths
from panda.logging.logger import get_logger
from panda.logging.tags import CLI

logger = get_logger(__name__)

_MODE_CHOICES = {
    "none": None,
    "include": SubdirectoryMode.INCLUDED,
    "exclude": SubdirectoryMode.EXCLUDED,
}


def capture_config() -> PandaConfig:
    """Ask the user for every stored setting."""
    source = ui.prompt_path("Source directory", default=".", must_exist=True)
    target = ui.prompt_path("Target directory", default="pdf", must_exist=False)

    pandoc_options: list[str] = []
    if ui.prompt_confirm("Provide pandoc options?", default=False):
        pandoc_options = ui.prompt_list("Pandoc options")

    choice = ui.prompt_numbered_choice(
        "Include or exclude specific subdirectories",
        list(_MODE_CHOICES),
        default="none",
    )
    mode = _MODE_CHOICES[choice]
    subdirectories: list[str] = []
    if mode is not None:
        subdirectories = ui.prompt_list("Subdirectory fragments")
        if not subdirectories:
            mode = None

    return PandaConfig(
        source_directory=str(source),
        target_directory=str(target),
        pandoc_options=pandoc_options,
        subdirectories=subdirectories,
        subdirectory_mode=mode,
    )


def capture_and_save() -> PandaConfig:
    config = capture_config()
    path = save_config(config)
    logger.info(f"{CLI} Stored configuration at {path}")
    ui.success(f"Configuration saved to {path}")
    return config


def command(force: bool = False) -> None:
    """
    Capture and store the run configuration.

    Args:
        force: Overwrite an existing configuration without asking.
    """
    ui.header("panda init", "Configure source and target directories")

    if config_exists() and not force:
        if not ui.prompt_confirm(
            f"Configuration already exists at {PandaPaths.config()}. Overwrite?",
            default=False,
        ):
            ui.info("Keeping existing configuration")
            raise typer.Exit(0)

    capture_and_save()
