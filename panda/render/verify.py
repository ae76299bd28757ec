# panda/render/verify.py
"""
Verification pass.

Re-hashes every file the ledger knows about and reports the paths whose
content no longer matches the recorded hash. This is what detects edits
made outside panda (restored backups, other tools, manual edits).
"""

from __future__ import annotations

from typing import Callable, FrozenSet

from panda.logging.logger import get_logger
from panda.logging.tags import VERIFY
from panda.render.hashing import compute_content_hash
from panda.render.ledger import ChecksumLedger

logger = get_logger(__name__)

MismatchSet = FrozenSet[str]


def verify(
    ledger: ChecksumLedger,
    hasher: Callable[[str], str] = compute_content_hash,
) -> MismatchSet:
    """
    Return the ledger paths whose live content hash differs from the record.

    A path that can no longer be read (deleted, permissions) counts as a
    mismatch.
    """
    mismatched = set()

    for entry in ledger:
        try:
            live_hash = hasher(entry.path)
        except OSError as e:
            logger.debug(f"{VERIFY} {entry.path}: cannot hash ({e.strerror or e})")
            mismatched.add(entry.path)
            continue

        if live_hash != entry.content_hash:
            logger.debug(f"{VERIFY} {entry.path}: FAILED")
            mismatched.add(entry.path)

    logger.info(f"{VERIFY} {len(mismatched)} of {len(ledger)} ledger entries changed")
    return frozenset(mismatched)


__all__ = ["MismatchSet", "verify"]
