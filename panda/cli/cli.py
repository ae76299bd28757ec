# panda/cli/cli.py
"""
Main panda CLI.

Running ``panda`` with no command performs an incremental render, the same
as ``panda run``.
"""

from __future__ import annotations

import typer

from panda import __version__
from panda.cli.commands import config as config_cmd
from panda.cli.commands import doctor as doctor_cmd
from panda.cli.commands import init as init_cmd
from panda.cli.commands import run as run_cmd
from panda.cli.commands import status as status_cmd
from panda.logging.logger import configure_logging

app = typer.Typer(
    help="panda - render markdown trees to PDF, only re-rendering what changed",
    no_args_is_help=False,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"panda {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        run_cmd.command()


@app.command("run")
def run(
    force: bool = typer.Option(False, "--force", "-f", help="Render every document."),
    prune: bool = typer.Option(
        False, "--prune", help="Drop ledger entries for deleted source files."
    ),
) -> None:
    """Render new, changed and missing documents."""
    run_cmd.command(force=force, prune=prune)


@app.command("init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite without asking."),
) -> None:
    """Configure source/target directories and pandoc options."""
    init_cmd.command(force=force)


@app.command("status")
def status(
    show_all: bool = typer.Option(False, "--all", "-a", help="List up-to-date documents too."),
) -> None:
    """Show which documents would be rendered, and why."""
    status_cmd.command(show_all=show_all)


@app.command("doctor")
def doctor() -> None:
    """Check dependencies and configuration."""
    doctor_cmd.command()


@app.command("config")
def config(
    raw: bool = typer.Option(False, "--raw", help="Print the stored YAML."),
) -> None:
    """Show the stored configuration."""
    config_cmd.command(raw=raw)


if __name__ == "__main__":
    app()
