"""Stable identifiers for workspace entries."""

import hashlib


def path_id(value: str) -> int:
    """Return a 64-bit unsigned identifier for a path string.

    Uses the first 8 bytes of the SHA256 digest, so the same path always
    maps to the same id (within a run and across runs).
    """
    digest = hashlib.sha256(value.encode("utf-8", "surrogateescape")).digest()
    return int.from_bytes(digest[:8], "big")
