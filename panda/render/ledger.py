# panda/render/ledger.py
"""
Checksum ledger.

Records, per source document, the content hash of the last successful
render. The file uses the ``sha256sum`` line format so ``sha256sum -c`` can
check it directly:

    <64 hex chars><two spaces><absolute path>

Paths containing a backslash or a newline follow ``sha256sum``'s escaping:
the line starts with a backslash and the path has ``\\`` and ``\\n``
escapes.
"""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from panda.core.exceptions import LedgerError
from panda.logging.logger import get_logger
from panda.logging.tags import LEDGER

logger = get_logger(__name__)

# Text mode ("  ") and binary mode (" *") separators are both accepted.
_LINE_RE = re.compile(r"^(?P<escaped>\\)?(?P<hash>[0-9a-fA-F]+) [ *](?P<path>.+)$")


@dataclass(frozen=True)
class ChecksumEntry:
    path: str
    content_hash: str

    def to_line(self) -> str:
        if "\\" in self.path or "\n" in self.path:
            escaped = self.path.replace("\\", "\\\\").replace("\n", "\\n")
            return f"\\{self.content_hash}  {escaped}"
        return f"{self.content_hash}  {self.path}"

    @classmethod
    def from_line(cls, line: str) -> Optional["ChecksumEntry"]:
        """Parse one ledger line. Returns None if the line is malformed."""
        match = _LINE_RE.match(line)
        if match is None:
            return None
        path = match.group("path")
        if match.group("escaped"):
            path = _unescape(path)
        return cls(path=path, content_hash=match.group("hash").lower())


def _unescape(path: str) -> str:
    out = []
    chars = iter(path)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append("\n" if nxt == "n" else nxt)
    return "".join(out)


class ChecksumLedger:
    """
    Ordered, path-unique mapping of source path to content hash.

    Insertion order is the serialization order, so upserting an existing
    path keeps its line where it was and ledger diffs stay minimal.
    """

    def __init__(self, entries: Optional[List[ChecksumEntry]] = None) -> None:
        self._hashes: Dict[str, str] = {}
        for entry in entries or []:
            self._hashes[entry.path] = entry.content_hash

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, path: str) -> Optional[ChecksumEntry]:
        """Exact-match lookup; no path normalization is applied."""
        content_hash = self._hashes.get(path)
        if content_hash is None:
            return None
        return ChecksumEntry(path=path, content_hash=content_hash)

    def __contains__(self, path: object) -> bool:
        return path in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def __iter__(self) -> Iterator[ChecksumEntry]:
        for path, content_hash in self._hashes.items():
            yield ChecksumEntry(path=path, content_hash=content_hash)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChecksumLedger):
            return NotImplemented
        return list(self._hashes.items()) == list(other._hashes.items())

    @property
    def paths(self) -> List[str]:
        return list(self._hashes)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def upsert(self, path: str, content_hash: str) -> None:
        """Replace the hash in place if ``path`` is known, else append."""
        self._hashes[path] = content_hash

    def remove(self, path: str) -> bool:
        return self._hashes.pop(path, None) is not None

    def copy(self) -> "ChecksumLedger":
        clone = ChecksumLedger()
        clone._hashes = dict(self._hashes)
        return clone

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_text(self) -> str:
        if not self._hashes:
            return ""
        return "".join(f"{entry.to_line()}\n" for entry in self)

    @classmethod
    def from_text(cls, text: str) -> "ChecksumLedger":
        ledger = cls()
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            entry = ChecksumEntry.from_line(line)
            if entry is None:
                logger.warning(f"{LEDGER} Ignoring malformed ledger line {lineno}: {line!r}")
                continue
            ledger.upsert(entry.path, entry.content_hash)
        return ledger

    @classmethod
    def load(cls, storage_path: str | Path) -> "ChecksumLedger":
        """
        Load a ledger. A missing or empty file yields an empty ledger.

        Undecodable bytes in paths come back surrogate-escaped, the same
        str os.walk yields for them, and are written back unchanged.
        """
        storage_path = Path(storage_path)
        try:
            text = storage_path.read_text(encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            logger.debug(f"{LEDGER} No ledger at {storage_path}, starting empty")
            return cls()
        except OSError as e:
            logger.warning(f"{LEDGER} Could not read {storage_path} ({e}), starting empty")
            return cls()

        ledger = cls.from_text(text)
        logger.debug(f"{LEDGER} Loaded {len(ledger)} entries from {storage_path}")
        return ledger

    def save(self, storage_path: str | Path) -> None:
        """
        Replace the stored ledger with this one.

        The new content is written to a temporary sibling and renamed over
        the old file, so readers see either the old or the new ledger.

        Raises:
            LedgerError: If the ledger could not be written.
        """
        storage_path = Path(storage_path)
        tmp_name: Optional[str] = None
        try:
            storage_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{storage_path.name}.", suffix=".tmp", dir=storage_path.parent
            )
            with os.fdopen(
                fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
            ) as f:
                f.write(self.to_text())
            os.replace(tmp_name, storage_path)
        except (OSError, UnicodeError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LedgerError(f"Could not write checksum ledger {storage_path}: {e}") from e

        logger.info(f"{LEDGER} Wrote {len(self)} entries to {storage_path}")


__all__ = ["ChecksumEntry", "ChecksumLedger"]
