# panda/render/scanner.py
"""
Document discovery.

Walks the source directory and returns the root-relative paths of every
document that passes the subdirectory policy. Discovery never decides
whether a document needs rendering; it only lists candidates.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from panda.config.schema import PandaConfig, SubdirectoryMode
from panda.core.exceptions import DiscoveryError
from panda.logging.logger import get_logger
from panda.logging.tags import SCAN

logger = get_logger(__name__)

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md",)


class PolicyMode(str, Enum):
    NONE = "none"
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class SubdirectoryPolicy:
    """
    Which parts of the source tree are eligible.

    Fragments are plain substrings matched against the root-relative POSIX
    path. A policy without fragments does not filter anything.
    """

    mode: PolicyMode = PolicyMode.NONE
    fragments: Tuple[str, ...] = ()

    @classmethod
    def include(cls, fragments: Iterable[str]) -> "SubdirectoryPolicy":
        return cls(PolicyMode.INCLUDE, _clean_fragments(fragments))

    @classmethod
    def exclude(cls, fragments: Iterable[str]) -> "SubdirectoryPolicy":
        return cls(PolicyMode.EXCLUDE, _clean_fragments(fragments))

    @classmethod
    def from_config(cls, config: PandaConfig) -> "SubdirectoryPolicy":
        if config.subdirectory_mode == SubdirectoryMode.INCLUDED:
            return cls.include(config.subdirectories)
        if config.subdirectory_mode == SubdirectoryMode.EXCLUDED:
            return cls.exclude(config.subdirectories)
        return cls()

    @property
    def is_active(self) -> bool:
        return self.mode != PolicyMode.NONE and bool(self.fragments)

    def matches(self, relative_path: str) -> bool:
        if not self.is_active:
            return True
        hit = any(fragment in relative_path for fragment in self.fragments)
        return hit if self.mode == PolicyMode.INCLUDE else not hit


def _clean_fragments(fragments: Iterable[str]) -> Tuple[str, ...]:
    return tuple(f for f in (frag.strip() for frag in fragments) if f)


@dataclass
class ScanResult:
    """Result of a directory scan."""

    root: Path
    files: List[str] = field(default_factory=list)
    filtered_out: int = 0

    def __len__(self) -> int:
        return len(self.files)


class DocumentScanner:
    """
    Lists documents under a source root.

    Only regular files are returned; symlinks are neither followed nor
    listed. Paths are relative to the root, use forward slashes, keep their
    extension, and come back sorted.
    """

    def __init__(
        self,
        policy: Optional[SubdirectoryPolicy] = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self._policy = policy or SubdirectoryPolicy()
        self._extensions = tuple(extensions)

    def scan(self, source_root: str | Path) -> ScanResult:
        root = Path(source_root)
        _check_readable(root)

        result = ScanResult(root=root)
        walk_errors: List[OSError] = []

        for dirpath, dirnames, filenames in os.walk(root, onerror=walk_errors.append):
            dirnames.sort()
            current = Path(dirpath)
            for name in filenames:
                if not name.endswith(self._extensions):
                    continue
                path = current / name
                if path.is_symlink() or not path.is_file():
                    continue

                relative = path.relative_to(root).as_posix()
                if self._policy.matches(relative):
                    result.files.append(relative)
                else:
                    result.filtered_out += 1

        for error in walk_errors:
            if Path(error.filename or "") == root:
                raise DiscoveryError(f"Cannot read source directory {root}: {error.strerror}")
            logger.warning(f"{SCAN} Skipping unreadable directory {error.filename}: {error.strerror}")

        result.files.sort()
        logger.info(
            f"{SCAN} Found {len(result.files)} documents under {root} "
            f"({result.filtered_out} filtered out)"
        )
        return result


def _check_readable(root: Path) -> None:
    if not root.exists():
        raise DiscoveryError(f"Source directory does not exist: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"Source path is not a directory: {root}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise DiscoveryError(f"Source directory is not readable: {root}")


def discover(
    source_root: str | Path,
    policy: Optional[SubdirectoryPolicy] = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> List[str]:
    """
    Convenience function returning the sorted relative document paths.

    Raises:
        DiscoveryError: If the source root is missing or unreadable.
    """
    return DocumentScanner(policy, extensions).scan(source_root).files


__all__ = [
    "DEFAULT_EXTENSIONS",
    "PolicyMode",
    "SubdirectoryPolicy",
    "ScanResult",
    "DocumentScanner",
    "discover",
]
