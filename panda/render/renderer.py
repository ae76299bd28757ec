# panda/render/renderer.py
"""
External renderer contract.

A renderer turns one source document into one PDF. Panda only looks at
whether it succeeded; how the conversion happens is the renderer's business.
The default implementation shells out to pandoc.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from panda.config.schema import PandaConfig
from panda.logging.logger import get_logger
from panda.logging.tags import RENDER

logger = get_logger(__name__)

_STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class RenderRequest:
    source_path: str
    resource_path: str
    output_path: str
    options: Sequence[str] = ()


@dataclass
class RenderResult:
    ok: bool
    returncode: Optional[int] = None
    message: str = ""

    @classmethod
    def success(cls) -> "RenderResult":
        return cls(ok=True, returncode=0)

    @classmethod
    def failure(cls, message: str, returncode: Optional[int] = None) -> "RenderResult":
        return cls(ok=False, returncode=returncode, message=message)


@runtime_checkable
class Renderer(Protocol):
    """Protocol for document renderers."""

    def render(self, request: RenderRequest) -> RenderResult:
        """Render one document. Must not raise for ordinary failures."""
        ...


@dataclass
class PandocRenderer:
    """
    Renders markdown to PDF with pandoc.

    Options are appended verbatim, after the fixed arguments and before the
    output flag. No shell is involved, so paths with spaces or quotes are safe.
    """

    executable: str = "pandoc"
    pdf_engine: str = "tectonic"

    def build_command(self, request: RenderRequest) -> List[str]:
        return [
            self.executable,
            "-t",
            "pdf",
            f"--pdf-engine={self.pdf_engine}",
            f"--resource-path={request.resource_path}",
            *request.options,
            f"--output={request.output_path}",
            request.source_path,
        ]

    def render(self, request: RenderRequest) -> RenderResult:
        command = self.build_command(request)
        logger.debug(f"{RENDER} Running: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return RenderResult.failure(f"{self.executable} not found on PATH")
        except OSError as e:
            return RenderResult.failure(f"could not start {self.executable}: {e}")

        if completed.returncode != 0:
            return RenderResult.failure(
                _tail(completed.stderr) or f"{self.executable} exited with {completed.returncode}",
                returncode=completed.returncode,
            )

        if completed.stderr:
            logger.debug(f"{RENDER} {self.executable} stderr: {_tail(completed.stderr)}")
        return RenderResult.success()


def _tail(text: Optional[str]) -> str:
    if not text:
        return ""
    lines = text.strip().splitlines()
    return "\n".join(lines[-_STDERR_TAIL_LINES:])


def build_renderer(config: PandaConfig) -> Renderer:
    """Create the renderer described by the configuration."""
    return PandocRenderer(executable=config.pandoc_path, pdf_engine=config.pdf_engine)


__all__ = [
    "RenderRequest",
    "RenderResult",
    "Renderer",
    "PandocRenderer",
    "build_renderer",
]
