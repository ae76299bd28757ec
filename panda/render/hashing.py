# panda/render/hashing.py
"""Content hashing, compatible with ``sha256sum``."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 64 * 1024


def compute_content_hash(path: str | Path) -> str:
    """
    Return the lowercase hex SHA-256 digest of a file's bytes.

    Raises:
        OSError: If the file cannot be read.
    """
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


__all__ = ["compute_content_hash"]
