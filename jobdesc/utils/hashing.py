"""Hashing utilities for deterministic choices and change detection.

This module provides:
- stable_index: reproducible pick among N alternatives, keyed by context
- content_fingerprint: whitespace- and case-insensitive hash of a description
"""

import hashlib
import re

_WHITESPACE = re.compile(r"\s+")


def hash_string(value: str) -> str:
    """Compute SHA256 hash of a string value.

    Args:
        value: String to hash

    Returns:
        Hexadecimal string representation of SHA256 hash (64 characters)
    """
    hash_obj = hashlib.sha256(value.encode("utf-8"))
    return hash_obj.hexdigest()


def stable_index(key: str, modulo: int) -> int:
    """Map a key to an index in ``range(modulo)``, identically on every run.

    Unlike ``hash()``, the result does not depend on PYTHONHASHSEED, so
    replacement choices stay the same across processes.

    Args:
        key: Context string (e.g. rule id, offset and matched text)
        modulo: Number of alternatives; must be positive

    Returns:
        Index between 0 and modulo - 1

    Raises:
        ValueError: If modulo is not positive

    Example:
        >>> stable_index("vocabulary.leverage:12:leverage", 3) == stable_index("vocabulary.leverage:12:leverage", 3)
        True
    """
    if modulo <= 0:
        raise ValueError(f"modulo must be positive, got {modulo}")
    if modulo == 1:
        return 0
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % modulo


def content_fingerprint(text: str) -> str:
    """Hash a description ignoring case and whitespace differences.

    Two texts with the same fingerprint differ only in spacing or case,
    which maintenance reports treat as "no real change".

    Args:
        text: Description text (None-safe: empty string hashes as "")

    Returns:
        Hexadecimal SHA256 digest (64 characters)
    """
    normalized = _WHITESPACE.sub(" ", (text or "").lower()).strip()
    return hash_string(normalized)
