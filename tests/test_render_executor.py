# tests/test_render_executor.py
"""
Tests for panda.render.executor module.

Key tests verify that:
1. A second run with no changes renders nothing and leaves the ledger alone
2. New, changed and PDF-less documents are rendered
3. A failed render leaves its ledger entry exactly as it was
4. Preconditions abort before any render
"""

import os
import sys
from pathlib import Path
from typing import List, Set

import pytest

from panda.config import PandaConfig, SubdirectoryMode
from panda.core.exceptions import DiscoveryError, LedgerError, PreconditionError
from panda.render.executor import (
    RenderExecutor,
    RenderSummary,
    prepare_run,
    run_incremental_render,
)
from panda.render.hashing import compute_content_hash
from panda.render.ledger import ChecksumLedger
from panda.render.renderer import RenderRequest, RenderResult


class MockRenderer:
    """Renderer that writes a fake PDF, or fails for chosen sources."""

    def __init__(self):
        self.requests: List[RenderRequest] = []
        self._fail_paths: Set[str] = set()

    def fail_on(self, path: Path) -> None:
        self._fail_paths.add(str(path))

    def render(self, request: RenderRequest) -> RenderResult:
        self.requests.append(request)
        if request.source_path in self._fail_paths:
            return RenderResult.failure("pandoc exited with 43", returncode=43)
        Path(request.output_path).write_bytes(b"%PDF-1.7 fake")
        return RenderResult.success()

    @property
    def rendered_sources(self) -> List[str]:
        return [r.source_path for r in self.requests]


@pytest.fixture
def workspace(tmp_path: Path) -> dict:
    root = tmp_path.resolve()
    source = root / "docs"
    (source / "guide").mkdir(parents=True)
    (source / "intro.md").write_text("# Intro\n", encoding="utf-8")
    (source / "guide" / "setup.md").write_text("# Setup\n", encoding="utf-8")
    return {
        "source": source,
        "target": root / "pdf",
        "ledger_path": root / ".panda" / "sha256sum.txt",
        "config": PandaConfig(
            source_directory=str(source),
            target_directory=str(root / "pdf"),
            pandoc_options=["--toc", "-V", "geometry:margin=1in"],
        ),
    }


def run(workspace: dict, renderer: MockRenderer, **kwargs) -> RenderSummary:
    return run_incremental_render(
        workspace["config"],
        renderer=renderer,
        ledger_path=workspace["ledger_path"],
        **kwargs,
    )


class TestRenderSummary:
    """Tests for RenderSummary."""

    def test_str_format(self):
        summary = RenderSummary(scanned=10, rendered=3, skipped=6, failed=1)

        assert str(summary) == "scanned 10, rendered 3, skipped 6, failed 1"
        assert summary.up_to_date is False

    def test_up_to_date(self):
        assert RenderSummary(scanned=4, skipped=4).up_to_date is True

    def test_duration(self):
        from datetime import datetime

        summary = RenderSummary()
        summary.started_at = datetime(2024, 1, 1, 0, 0, 0)
        summary.finished_at = datetime(2024, 1, 1, 0, 0, 10)

        assert summary.duration_seconds == 10.0


class TestPrepareRun:
    """Tests for prepare_run preconditions."""

    def test_builds_context(self, workspace):
        context = prepare_run(workspace["config"], ledger_path=workspace["ledger_path"])

        assert context.source_root == workspace["source"]
        assert context.candidates == ("guide/setup.md", "intro.md")
        assert len(context.ledger) == 0
        assert context.mismatches == frozenset()
        assert context.options == ("--toc", "-V", "geometry:margin=1in")

    def test_unset_directories_reported_together(self, tmp_path: Path):
        with pytest.raises(PreconditionError) as excinfo:
            prepare_run(PandaConfig(), ledger_path=tmp_path / "sha256sum.txt")

        assert excinfo.value.problems == ["Source directory not set", "Target directory not set"]

    def test_no_documents_and_unset_target_reported_together(self, tmp_path: Path):
        config = PandaConfig(source_directory=str(tmp_path))

        with pytest.raises(PreconditionError) as excinfo:
            prepare_run(config, ledger_path=tmp_path / "sha256sum.txt")

        problems = excinfo.value.problems
        assert len(problems) == 2
        assert problems[0] == "Target directory not set"
        assert problems[1].startswith("Couldn't find documents")

    def test_missing_source_and_unset_target_reported_together(self, tmp_path: Path):
        config = PandaConfig(source_directory=str(tmp_path / "missing"))

        with pytest.raises(DiscoveryError) as excinfo:
            prepare_run(config, ledger_path=tmp_path / "sha256sum.txt")

        assert excinfo.value.problems[0] == "Target directory not set"
        assert len(excinfo.value.problems) == 2

    def test_no_documents(self, tmp_path: Path):
        config = PandaConfig(source_directory=str(tmp_path), target_directory=str(tmp_path / "out"))

        with pytest.raises(PreconditionError, match="Couldn't find documents"):
            prepare_run(config, ledger_path=tmp_path / "sha256sum.txt")

    def test_missing_source(self, tmp_path: Path):
        config = PandaConfig(
            source_directory=str(tmp_path / "missing"), target_directory=str(tmp_path / "out")
        )

        with pytest.raises(DiscoveryError):
            prepare_run(config, ledger_path=tmp_path / "sha256sum.txt")

    def test_filter_leaving_nothing_is_a_precondition_error(self, workspace, tmp_path: Path):
        config = workspace["config"].model_copy(
            update={
                "subdirectories": ["nothing-matches"],
                "subdirectory_mode": SubdirectoryMode.INCLUDED,
            }
        )

        with pytest.raises(PreconditionError):
            prepare_run(config, ledger_path=tmp_path / "sha256sum.txt")


class TestRenderExecutor:
    """Tests for RenderExecutor."""

    def test_first_run_renders_everything(self, workspace):
        renderer = MockRenderer()

        summary = run(workspace, renderer)

        assert summary.rendered == 2
        assert summary.skipped == 0
        assert summary.ledger_written is True
        assert (workspace["target"] / "intro.md.pdf").is_file()
        assert (workspace["target"] / "guide" / "setup.md.pdf").is_file()

        ledger = ChecksumLedger.load(workspace["ledger_path"])
        intro = workspace["source"] / "intro.md"
        assert ledger.lookup(str(intro)).content_hash == compute_content_hash(intro)

    def test_request_contents(self, workspace):
        renderer = MockRenderer()

        run(workspace, renderer)

        request = next(r for r in renderer.requests if r.source_path.endswith("setup.md"))
        assert request.resource_path == str(workspace["source"] / "guide")
        assert request.output_path == str(workspace["target"] / "guide" / "setup.md.pdf")
        assert list(request.options) == ["--toc", "-V", "geometry:margin=1in"]

    def test_second_run_is_idempotent(self, workspace):
        """No changes: zero renders and the ledger file is not rewritten."""
        run(workspace, MockRenderer())
        ledger_path = workspace["ledger_path"]
        before = ledger_path.read_bytes()
        os.utime(ledger_path, ns=(1_000_000_000, 1_000_000_000))

        renderer = MockRenderer()
        summary = run(workspace, renderer)

        assert renderer.requests == []
        assert summary.up_to_date is True
        assert summary.skipped == 2
        assert summary.ledger_written is False
        assert ledger_path.read_bytes() == before
        assert ledger_path.stat().st_mtime_ns == 1_000_000_000

    def test_new_file_renders_once(self, workspace):
        run(workspace, MockRenderer())
        new_doc = workspace["source"] / "guide" / "advanced.md"
        new_doc.write_text("# Advanced\n", encoding="utf-8")

        renderer = MockRenderer()
        summary = run(workspace, renderer)

        assert renderer.rendered_sources == [str(new_doc)]
        assert summary.rendered == 1
        assert summary.skipped == 2

    def test_changed_content_rerenders_and_updates_hash(self, workspace):
        run(workspace, MockRenderer())
        intro = workspace["source"] / "intro.md"
        intro.write_text("# Intro, revised\n", encoding="utf-8")

        renderer = MockRenderer()
        run(workspace, renderer)

        assert renderer.rendered_sources == [str(intro)]
        ledger = ChecksumLedger.load(workspace["ledger_path"])
        assert ledger.lookup(str(intro)).content_hash == compute_content_hash(intro)

    def test_updated_entry_keeps_its_position(self, workspace):
        run(workspace, MockRenderer())
        order_before = ChecksumLedger.load(workspace["ledger_path"]).paths
        (workspace["source"] / "guide" / "setup.md").write_text("# Changed\n", encoding="utf-8")

        run(workspace, MockRenderer())

        assert ChecksumLedger.load(workspace["ledger_path"]).paths == order_before

    def test_missing_output_forces_render(self, workspace):
        run(workspace, MockRenderer())
        (workspace["target"] / "intro.md.pdf").unlink()

        renderer = MockRenderer()
        run(workspace, renderer)

        assert renderer.rendered_sources == [str(workspace["source"] / "intro.md")]

    def test_partial_failure_isolation(self, workspace):
        intro = workspace["source"] / "intro.md"
        setup = workspace["source"] / "guide" / "setup.md"
        renderer = MockRenderer()
        renderer.fail_on(intro)

        summary = run(workspace, renderer)

        assert summary.rendered == 1
        assert summary.failed == 1
        assert summary.ledger_written is True
        assert summary.error_details == ["intro.md: pandoc exited with 43"]
        ledger = ChecksumLedger.load(workspace["ledger_path"])
        assert str(intro) not in ledger
        assert str(setup) in ledger

    def test_failed_render_keeps_previous_entry(self, workspace):
        run(workspace, MockRenderer())
        intro = workspace["source"] / "intro.md"
        old_hash = ChecksumLedger.load(workspace["ledger_path"]).lookup(str(intro)).content_hash
        intro.write_text("# Broken edit\n", encoding="utf-8")

        renderer = MockRenderer()
        renderer.fail_on(intro)
        run(workspace, renderer)

        ledger = ChecksumLedger.load(workspace["ledger_path"])
        assert ledger.lookup(str(intro)).content_hash == old_hash

        # Still stale, so the next run tries again
        retry = MockRenderer()
        run(workspace, retry)
        assert retry.rendered_sources == [str(intro)]

    def test_failed_first_render_is_retried(self, workspace):
        intro = workspace["source"] / "intro.md"
        failing = MockRenderer()
        failing.fail_on(intro)
        run(workspace, failing)

        retry = MockRenderer()
        run(workspace, retry)

        assert retry.rendered_sources == [str(intro)]

    def test_all_failed_still_writes_ledger(self, workspace):
        renderer = MockRenderer()
        renderer.fail_on(workspace["source"] / "intro.md")
        renderer.fail_on(workspace["source"] / "guide" / "setup.md")

        summary = run(workspace, renderer)

        assert summary.failed == 2
        assert summary.up_to_date is False
        assert workspace["ledger_path"].read_text(encoding="utf-8") == ""

    def test_force_rerenders_everything(self, workspace):
        run(workspace, MockRenderer())

        renderer = MockRenderer()
        summary = run(workspace, renderer, force=True)

        assert summary.rendered == 2
        assert summary.skipped == 0

    def test_stale_entries_kept_by_default(self, workspace):
        run(workspace, MockRenderer())
        gone = workspace["source"] / "guide" / "setup.md"
        gone.unlink()
        (workspace["source"] / "intro.md").write_text("# New intro\n", encoding="utf-8")

        run(workspace, MockRenderer())

        assert str(gone) in ChecksumLedger.load(workspace["ledger_path"])

    def test_prune_drops_stale_entries(self, workspace):
        run(workspace, MockRenderer())
        gone = workspace["source"] / "guide" / "setup.md"
        gone.unlink()

        renderer = MockRenderer()
        summary = run(workspace, renderer, prune=True)

        assert renderer.requests == []
        assert summary.pruned == 1
        assert summary.ledger_written is True
        ledger = ChecksumLedger.load(workspace["ledger_path"])
        assert ledger.paths == [str(workspace["source"] / "intro.md")]

    def test_progress_callback(self, workspace):
        calls = []

        run(workspace, MockRenderer(), on_progress=lambda i, n, c: calls.append((i, n, c.relative_path)))

        assert calls == [(1, 2, "guide/setup.md"), (2, 2, "intro.md")]

    def test_ledger_write_failure_raises_and_keeps_pdfs(self, workspace, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        context = prepare_run(workspace["config"], ledger_path=blocker / "sha256sum.txt")

        with pytest.raises(LedgerError):
            RenderExecutor(renderer=MockRenderer()).run(context)

        assert (workspace["target"] / "intro.md.pdf").is_file()

    def test_executor_does_not_mutate_loaded_ledger(self, workspace):
        context = prepare_run(workspace["config"], ledger_path=workspace["ledger_path"])

        RenderExecutor(renderer=MockRenderer()).run(context)

        assert len(context.ledger) == 0


@pytest.mark.skipif(sys.platform in ("darwin", "win32"), reason="needs byte-string file names")
class TestUndecodableFileNames:
    """Source names that are not valid UTF-8 go through a full run."""

    @pytest.fixture
    def latin1_doc(self, workspace) -> bytes:
        raw = os.path.join(os.fsencode(workspace["source"]), b"caf\xe9.md")
        try:
            with open(raw, "wb") as f:
                f.write(b"# Caf\xe9\n")
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 names")
        return raw

    def test_ledger_is_written_and_run_is_idempotent(self, workspace, latin1_doc):
        summary = run(workspace, MockRenderer())

        assert summary.rendered == 3
        assert summary.failed == 0
        assert summary.ledger_written is True
        assert latin1_doc in workspace["ledger_path"].read_bytes()

        renderer = MockRenderer()
        summary = run(workspace, renderer)

        assert renderer.requests == []
        assert summary.up_to_date
