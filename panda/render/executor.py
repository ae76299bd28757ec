# panda/render/executor.py
"""
Executor for incremental rendering.

Orchestrates the full run:
1. Check the configured directories
2. Discover documents
3. Load the checksum ledger and verify it against the files on disk
4. Compute which documents need rendering
5. Render them one by one, staging ledger updates for successes
6. Write the staged ledger, unless every document was already up to date
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from panda.config.schema import PandaConfig
from panda.core.exceptions import DiscoveryError, PreconditionError, RenderError
from panda.core.paths import PandaPaths
from panda.logging.logger import get_logger
from panda.logging.tags import LEDGER, RENDER
from panda.render.differ import DiffResult, Differ, RenderCandidate
from panda.render.hashing import compute_content_hash
from panda.render.ledger import ChecksumLedger
from panda.render.renderer import Renderer, RenderRequest
from panda.render.scanner import DocumentScanner, SubdirectoryPolicy
from panda.render.verify import MismatchSet, verify

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, RenderCandidate], None]


@dataclass(frozen=True)
class RunContext:
    """Everything one run needs, gathered before the first render."""

    source_root: Path
    target_root: Path
    candidates: Sequence[str]
    ledger: ChecksumLedger
    mismatches: MismatchSet
    ledger_path: Path
    options: Sequence[str] = ()


@dataclass
class RenderSummary:
    """Summary of a render run."""

    scanned: int = 0
    rendered: int = 0
    skipped: int = 0
    failed: int = 0
    pruned: int = 0
    ledger_written: bool = False
    error_details: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def attempted(self) -> int:
        return self.rendered + self.failed

    @property
    def up_to_date(self) -> bool:
        """True when no document had to be sent to the renderer."""
        return self.attempted == 0

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def __str__(self) -> str:
        base = (
            f"scanned {self.scanned}, rendered {self.rendered}, "
            f"skipped {self.skipped}, failed {self.failed}"
        )
        if self.pruned:
            base += f", pruned {self.pruned}"
        return base


def check_directories(config: PandaConfig) -> List[str]:
    problems = []
    if not config.source_directory:
        problems.append("Source directory not set")
    if not config.target_directory:
        problems.append("Target directory not set")
    return problems


def prepare_run(
    config: PandaConfig,
    ledger_path: Optional[Path] = None,
) -> RunContext:
    """
    Build the run context: discover, load the ledger, verify.

    Raises:
        PreconditionError: Every problem found: unset directories, no
            documents under the source.
        DiscoveryError: As above, when the source directory is also
            missing or unreadable.
    """
    problems = check_directories(config)
    discovery_failed = False
    candidates: List[str] = []

    # Discovery runs even with an unset target; all problems are raised together
    if config.source_directory:
        source_root = Path(config.source_directory).expanduser().resolve()
        scanner = DocumentScanner(SubdirectoryPolicy.from_config(config), config.extensions)
        try:
            candidates = scanner.scan(source_root).files
        except DiscoveryError as e:
            discovery_failed = True
            problems.extend(e.problems)
        else:
            if not candidates:
                extensions = ", ".join(config.extensions)
                problems.append(
                    f"Couldn't find documents ({extensions}) under source directory {source_root}"
                )

    if problems:
        if discovery_failed:
            raise DiscoveryError(problems)
        raise PreconditionError(problems)

    target_root = Path(config.target_directory).expanduser().resolve()

    ledger_path = ledger_path or PandaPaths.ledger()
    ledger = ChecksumLedger.load(ledger_path)
    mismatches = verify(ledger)

    return RunContext(
        source_root=source_root,
        target_root=target_root,
        candidates=tuple(candidates),
        ledger=ledger,
        mismatches=mismatches,
        ledger_path=ledger_path,
        options=tuple(config.pandoc_options),
    )


class RenderExecutor:
    """
    Executes the incremental render.

    The executor owns a staging copy of the ledger for the duration of a run.
    A successful render upserts the document's post-render hash into it; a
    failed render leaves its entry untouched so the document is retried on
    the next run. The staged ledger is written once, at the end.

    Usage:
        executor = RenderExecutor(renderer=PandocRenderer())
        summary = executor.run(prepare_run(config))
    """

    def __init__(
        self,
        *,
        renderer: Renderer,
        hasher: Callable[[str], str] = compute_content_hash,
    ) -> None:
        self._renderer = renderer
        self._hash = hasher

    def plan(self, context: RunContext, force: bool = False) -> DiffResult:
        differ = Differ(
            context.source_root,
            context.target_root,
            context.ledger,
            context.mismatches,
        )
        return differ.compute_diff(context.candidates, force=force)

    def run(
        self,
        context: RunContext,
        force: bool = False,
        prune: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RenderSummary:
        """
        Run the render pass.

        Args:
            context: Prepared run context.
            force: Render every candidate regardless of staleness.
            prune: Drop ledger entries whose source file no longer exists.
            on_progress: Optional callback(index, total, candidate) called
                before each document is sent to the renderer.

        Returns:
            RenderSummary with results.

        Raises:
            LedgerError: If the staged ledger could not be written. Rendered
                PDFs are kept.
        """
        summary = RenderSummary(scanned=len(context.candidates))
        staging = context.ledger.copy()

        if prune:
            summary.pruned = _prune_missing(staging)

        diff = self.plan(context, force=force)
        summary.skipped = len(diff.to_skip)

        total = len(diff.to_render)
        for index, candidate in enumerate(diff.to_render, start=1):
            if on_progress:
                on_progress(index, total, candidate)
            logger.info(
                f"{RENDER} Converting {candidate.relative_path} ({candidate.reason_display})"
            )

            try:
                self._render_one(candidate, context.options, staging)
                summary.rendered += 1
            except RenderError as e:
                summary.failed += 1
                summary.error_details.append(f"{candidate.relative_path}: {e.message}")
                logger.warning(f"{RENDER} Failed to render {candidate.relative_path}: {e.message}")

        if summary.up_to_date and not summary.pruned:
            logger.info(f"{RENDER} Documents are up to date, ledger left untouched")
        else:
            staging.save(context.ledger_path)
            summary.ledger_written = True

        summary.finished_at = datetime.now()
        logger.info(f"{RENDER} Render complete: {summary}")
        return summary

    def _render_one(
        self,
        candidate: RenderCandidate,
        options: Sequence[str],
        staging: ChecksumLedger,
    ) -> None:
        """
        Render one document and stage its new hash.

        Raises:
            RenderError: If the document could not be rendered.
        """
        try:
            Path(candidate.output_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RenderError(candidate.source_path, f"cannot create output directory: {e}") from e

        request = RenderRequest(
            source_path=candidate.source_path,
            resource_path=candidate.resource_path,
            output_path=candidate.output_path,
            options=tuple(options),
        )
        result = self._renderer.render(request)
        if not result.ok:
            raise RenderError(candidate.source_path, result.message or "renderer failed")

        # Hash after rendering so the ledger reflects exactly what was rendered
        try:
            content_hash = self._hash(candidate.source_path)
        except OSError as e:
            raise RenderError(candidate.source_path, f"rendered but could not hash source: {e}") from e

        staging.upsert(candidate.source_path, content_hash)


def _prune_missing(ledger: ChecksumLedger) -> int:
    stale = [path for path in ledger.paths if not os.path.exists(path)]
    for path in stale:
        ledger.remove(path)
        logger.info(f"{LEDGER} Pruned entry for missing file {path}")
    return len(stale)


def run_incremental_render(
    config: PandaConfig,
    *,
    renderer: Renderer,
    ledger_path: Optional[Path] = None,
    force: bool = False,
    prune: bool = False,
    on_progress: Optional[ProgressCallback] = None,
) -> RenderSummary:
    """
    Convenience function: prepare the run context and execute it.

    Raises:
        PreconditionError: If the run cannot start.
        LedgerError: If the ledger could not be written.
    """
    context = prepare_run(config, ledger_path=ledger_path)
    executor = RenderExecutor(renderer=renderer)
    return executor.run(context, force=force, prune=prune, on_progress=on_progress)


__all__ = [
    "RunContext",
    "RenderSummary",
    "RenderExecutor",
    "ProgressCallback",
    "check_directories",
    "prepare_run",
    "run_incremental_render",
]
