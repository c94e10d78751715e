"""Utility functions for hashing, excerpts, and time handling."""

from .excerpts import ChangeExcerpt, change_excerpt, single_line, truncate_text
from .hashing import content_fingerprint, hash_string, stable_index
from .timestamps import ensure_utc, format_timestamp, parse_iso_datetime, utc_now

__all__ = [
    # Hashing
    "hash_string",
    "stable_index",
    "content_fingerprint",
    # Excerpts
    "ChangeExcerpt",
    "change_excerpt",
    "single_line",
    "truncate_text",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "format_timestamp",
]
