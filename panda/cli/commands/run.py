# panda/cli/commands/run.py
"""
Run command.

Renders every document that is new, missing its PDF, or changed, and
updates the checksum ledger.
"""

from __future__ import annotations

import sys

import typer

from panda.cli.commands.init import capture_and_save
from panda.cli.context import CLIContext
from panda.cli.ui import ui
from panda.core.exceptions import ConfigNotFoundError, LedgerError, PandaError, PreconditionError
from panda.logging.logger import get_logger
from panda.logging.tags import CLI
from panda.render.differ import RenderCandidate
from panda.render.executor import RenderExecutor, prepare_run
from panda.render.renderer import build_renderer

logger = get_logger(__name__)


def load_context_or_capture() -> CLIContext:
    """
    Load the stored configuration, capturing it interactively on first use.

    Raises:
        ConfigNotFoundError: If nothing is stored and stdin is not a terminal.
    """
    ctx = CLIContext.load_or_none()
    if ctx is not None:
        return ctx

    if not sys.stdin.isatty():
        raise ConfigNotFoundError("No configuration found. Run 'panda init' first.")

    ui.warning("No configuration found, starting setup")
    capture_and_save()
    return CLIContext.load()


def report_precondition(error: PreconditionError) -> None:
    for problem in error.problems:
        ui.error(f"ERROR: {problem}")


def command(force: bool = False, prune: bool = False) -> None:
    """
    Render stale documents.

    Args:
        force: Render every document regardless of the ledger.
        prune: Drop ledger entries whose source file no longer exists.
    """
    try:
        ctx = load_context_or_capture()
        with ui.spinner("Scanning documents and verifying checksums..."):
            run_context = prepare_run(ctx.config, ledger_path=ctx.ledger_path)
    except PreconditionError as e:
        report_precondition(e)
        raise typer.Exit(1)
    except PandaError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    logger.debug(
        f"{CLI} {len(run_context.candidates)} candidates, "
        f"{len(run_context.mismatches)} checksum mismatches"
    )

    def on_progress(index: int, total: int, candidate: RenderCandidate) -> None:
        ui.step(index, total, f"CONVERTING: {candidate.relative_path}")

    executor = RenderExecutor(renderer=build_renderer(ctx.config))
    try:
        summary = executor.run(run_context, force=force, prune=prune, on_progress=on_progress)
    except LedgerError as e:
        ui.error(str(e))
        ui.info("Rendered PDFs were kept; they will be re-rendered on the next run.")
        raise typer.Exit(1)

    for detail in summary.error_details:
        ui.warning(f"Failed: {detail}")

    if summary.up_to_date and not summary.ledger_written:
        ui.success("Documents are up to date!")
        return

    ui.summary_panel(str(summary), title="Render summary", style="red" if summary.failed else "green")
    ui.success(f"Checksum ledger updated ({ctx.ledger_path})")
