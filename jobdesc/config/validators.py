"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

LARGE_LIMIT = 10000
MAX_SENSIBLE_CONCURRENCY = 32


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Check a raw configuration mapping for settings that are valid but suspect.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    messages = []

    batch = config_dict.get("batch") or {}
    if isinstance(batch, dict):
        limit = batch.get("limit")
        if isinstance(limit, int) and limit > LARGE_LIMIT:
            messages.append(f"Large batch limit ({limit}) loads every row into memory at once")

        concurrency = batch.get("concurrency")
        if isinstance(concurrency, int) and concurrency > MAX_SENSIBLE_CONCURRENCY:
            messages.append(
                f"Concurrency {concurrency} exceeds {MAX_SENSIBLE_CONCURRENCY}; "
                "formatting is CPU-bound and gains nothing from more threads"
            )

    scoring = config_dict.get("scoring") or {}
    if isinstance(scoring, dict) and scoring.get("threshold") == 0:
        messages.append("Scoring threshold 0 sends every description to the humanizer")

    schedule = config_dict.get("schedule") or {}
    if isinstance(schedule, dict) and schedule.get("enabled") and schedule.get("dry_run"):
        messages.append("Scheduled runs are in dry-run mode and will never save changes")

    return messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
