# panda/render/__init__.py
"""
Incremental rendering.

This package implements content-hash based incremental rendering:
- Only render documents that are new, missing their PDF, or changed
- Detect edits made outside panda by re-hashing ledger entries
- Keep the ledger in sha256sum format so it can be checked externally

Key components:
- Scanner: Walks the source tree and applies the subdirectory policy
- Ledger: Ordered path -> hash record of the last successful renders
- Verify: Finds ledger entries whose files changed on disk
- Differ: Decides render or skip per document
- Executor: Orchestrates the run and persists the ledger

Usage:
    from panda.render import PandocRenderer, run_incremental_render

    summary = run_incremental_render(config, renderer=PandocRenderer())
    print(summary)  # "scanned 10, rendered 3, skipped 7, failed 0"
"""

from panda.render.differ import (
    DiffResult,
    Differ,
    RenderCandidate,
    RenderReason,
    compute_diff,
    output_path_for,
)
from panda.render.executor import (
    RenderExecutor,
    RenderSummary,
    RunContext,
    prepare_run,
    run_incremental_render,
)
from panda.render.hashing import compute_content_hash
from panda.render.ledger import ChecksumEntry, ChecksumLedger
from panda.render.renderer import (
    PandocRenderer,
    Renderer,
    RenderRequest,
    RenderResult,
    build_renderer,
)
from panda.render.scanner import (
    DocumentScanner,
    PolicyMode,
    ScanResult,
    SubdirectoryPolicy,
    discover,
)
from panda.render.verify import MismatchSet, verify

__all__ = [
    # Scanner
    "PolicyMode",
    "SubdirectoryPolicy",
    "ScanResult",
    "DocumentScanner",
    "discover",
    # Ledger
    "compute_content_hash",
    "ChecksumEntry",
    "ChecksumLedger",
    # Verify
    "MismatchSet",
    "verify",
    # Differ
    "RenderReason",
    "RenderCandidate",
    "DiffResult",
    "Differ",
    "compute_diff",
    "output_path_for",
    # Renderer
    "RenderRequest",
    "RenderResult",
    "Renderer",
    "PandocRenderer",
    "build_renderer",
    # Executor
    "RunContext",
    "RenderSummary",
    "RenderExecutor",
    "prepare_run",
    "run_incremental_render",
]
