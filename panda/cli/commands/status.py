# panda/cli/commands/status.py
"""
Status command.

Dry run: shows which documents a run would render, and why, without
invoking the renderer or touching the ledger.
"""

from __future__ import annotations

import typer

from panda.cli.context import CLIContext
from panda.cli.ui import ui
from panda.cli.ui.console import ARROW
from panda.core.exceptions import PandaError, PreconditionError
from panda.render.differ import compute_diff
from panda.render.executor import prepare_run


def command(show_all: bool = False) -> None:
    """
    Show the render plan.

    Args:
        show_all: Also list documents that are up to date.
    """
    try:
        ctx = CLIContext.load()
        run_context = prepare_run(ctx.config, ledger_path=ctx.ledger_path)
    except PreconditionError as e:
        for problem in e.problems:
            ui.error(f"ERROR: {problem}")
        raise typer.Exit(1)
    except PandaError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    diff = compute_diff(
        run_context.candidates,
        source_root=run_context.source_root,
        target_root=run_context.target_root,
        ledger=run_context.ledger,
        mismatches=run_context.mismatches,
    )

    ui.header("panda status", f"{ctx.config.source_directory} {ARROW} {ctx.config.target_directory}")
    ui.info(f"Filter: {ctx.policy_display}")

    rows = [[c.relative_path, c.reason_display] for c in diff.to_render]
    if show_all:
        rows.extend([c.relative_path, c.reason_display] for c in diff.to_skip)

    if rows:
        ui.table(["Document", "Reason"], rows)

    if diff.to_render:
        ui.print(f"{len(diff.to_render)} to render, {len(diff.to_skip)} up to date")
    else:
        ui.success("Documents are up to date!")
