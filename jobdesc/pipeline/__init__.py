"""Batch maintenance over stored descriptions: formatting and humanization runs."""

from .models import (
    SCORE_BUCKETS,
    BatchOptions,
    DocumentOutcome,
    DocumentReport,
    MaintenanceRunResult,
    score_bucket,
    score_distribution,
)
from .runner import FORMAT, HUMANIZE, MaintenancePipeline
from .store import DocumentStore

__all__ = [
    "MaintenancePipeline",
    "DocumentStore",
    "BatchOptions",
    "DocumentOutcome",
    "DocumentReport",
    "MaintenanceRunResult",
    "SCORE_BUCKETS",
    "score_bucket",
    "score_distribution",
    "FORMAT",
    "HUMANIZE",
]
