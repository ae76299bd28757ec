# panda/render/differ.py
"""
Render decision computation.

Compares each discovered document against its PDF, the ledger and the
verification result, and sorts it into "render" or "skip".

This module ONLY computes actions - it does NOT execute them.
Execution is handled by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import AbstractSet, List, Sequence, Tuple

from panda.logging.logger import get_logger
from panda.logging.tags import RENDER
from panda.render.ledger import ChecksumLedger

logger = get_logger(__name__)

ARTIFACT_SUFFIX = ".pdf"


class RenderReason(str, Enum):
    """Why a document is rendered. Any single reason is sufficient."""

    OUTPUT_MISSING = "output_missing"
    NOT_IN_LEDGER = "not_in_ledger"
    CONTENT_CHANGED = "content_changed"
    FORCED = "forced"


def source_path_for(source_root: Path, relative_path: str) -> Path:
    return source_root / relative_path


def output_path_for(target_root: Path, relative_path: str) -> Path:
    """``docs/a.md`` becomes ``<target>/docs/a.md.pdf``; the extension is kept."""
    return target_root / f"{relative_path}{ARTIFACT_SUFFIX}"


@dataclass(frozen=True)
class RenderCandidate:
    """A discovered document together with its render decision inputs."""

    relative_path: str
    source_path: str  # Absolute, also the ledger key
    output_path: str  # Absolute
    reasons: Tuple[RenderReason, ...] = ()

    @property
    def needs_render(self) -> bool:
        return bool(self.reasons)

    @property
    def resource_path(self) -> str:
        """Directory relative references inside the document resolve against."""
        return str(Path(self.source_path).parent)

    @property
    def reason_display(self) -> str:
        return ", ".join(reason.value for reason in self.reasons) or "up to date"


@dataclass
class DiffResult:
    """
    Result of diff computation.

    - to_render: Documents that are new, missing their PDF, or changed
    - to_skip: Documents whose PDF is up to date
    """

    to_render: List[RenderCandidate] = field(default_factory=list)
    to_skip: List[RenderCandidate] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.to_render) + len(self.to_skip)

    @property
    def summary(self) -> str:
        return f"render={len(self.to_render)}, skip={len(self.to_skip)}"


def decide(
    *,
    output_exists: bool,
    in_ledger: bool,
    mismatched: bool,
    force: bool = False,
) -> Tuple[RenderReason, ...]:
    """
    Evaluate every staleness predicate independently.

    An empty tuple means skip.
    """
    reasons = []
    if force:
        reasons.append(RenderReason.FORCED)
    if not output_exists:
        reasons.append(RenderReason.OUTPUT_MISSING)
    if not in_ledger:
        reasons.append(RenderReason.NOT_IN_LEDGER)
    if mismatched:
        reasons.append(RenderReason.CONTENT_CHANGED)
    return tuple(reasons)


class Differ:
    """
    Computes which documents need rendering.

    The decision for a document uses three independent checks:
    1. Its PDF does not exist at the expected output path
    2. The ledger has no entry for its source path
    3. Its source path is in the verification mismatch set

    If any check holds the document is rendered, otherwise skipped.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        ledger: ChecksumLedger,
        mismatches: AbstractSet[str],
    ) -> None:
        self._source_root = Path(source_root)
        self._target_root = Path(target_root)
        self._ledger = ledger
        self._mismatches = mismatches

    def candidate_for(self, relative_path: str, force: bool = False) -> RenderCandidate:
        source_path = str(source_path_for(self._source_root, relative_path))
        output_path = output_path_for(self._target_root, relative_path)

        reasons = decide(
            output_exists=output_path.is_file(),
            in_ledger=self._ledger.lookup(source_path) is not None,
            mismatched=source_path in self._mismatches,
            force=force,
        )
        return RenderCandidate(
            relative_path=relative_path,
            source_path=source_path,
            output_path=str(output_path),
            reasons=reasons,
        )

    def compute_diff(self, candidates: Sequence[str], force: bool = False) -> DiffResult:
        result = DiffResult()
        for relative_path in candidates:
            candidate = self.candidate_for(relative_path, force=force)
            if candidate.needs_render:
                result.to_render.append(candidate)
            else:
                result.to_skip.append(candidate)

        logger.info(f"{RENDER} Diff computed: {result.summary}")
        return result


def compute_diff(
    candidates: Sequence[str],
    *,
    source_root: Path,
    target_root: Path,
    ledger: ChecksumLedger,
    mismatches: AbstractSet[str],
    force: bool = False,
) -> DiffResult:
    """Convenience function to compute a diff."""
    differ = Differ(source_root, target_root, ledger, mismatches)
    return differ.compute_diff(candidates, force=force)


__all__ = [
    "ARTIFACT_SUFFIX",
    "RenderReason",
    "RenderCandidate",
    "DiffResult",
    "Differ",
    "decide",
    "compute_diff",
    "source_path_for",
    "output_path_for",
]
