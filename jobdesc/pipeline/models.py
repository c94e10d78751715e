"""Data models for maintenance run options, per-document reports and run results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from jobdesc.utils.excerpts import ChangeExcerpt

# Inclusive score ranges used for distribution summaries
SCORE_BUCKETS: Tuple[Tuple[str, int, int], ...] = (
    ("0-29", 0, 29),
    ("30-50", 30, 50),
    ("51-70", 51, 70),
    ("71-100", 71, 100),
)


class DocumentOutcome(str, Enum):
    """Terminal state of one document in a maintenance run."""

    UNCHANGED = "unchanged"
    FORMATTED = "formatted"
    HUMANIZED = "formatted+humanized"
    ERROR = "error"

    @property
    def is_update(self) -> bool:
        return self in (DocumentOutcome.FORMATTED, DocumentOutcome.HUMANIZED)


@dataclass(frozen=True)
class BatchOptions:
    """
    Parameters of one maintenance run.

    Attributes:
        dry_run: Compute and report, but never save
        force: Bypass the needs-formatting pre-check
        limit: Maximum documents fetched (None = all)
        threshold: AI-score at or above which a document is humanized
        source_filter: Only process documents from this source
        concurrency: Worker threads used for the computation
    """

    dry_run: bool = False
    force: bool = False
    limit: Optional[int] = None
    threshold: int = 30
    source_filter: Optional[str] = None
    concurrency: int = 1

    def __post_init__(self):
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if not 0 <= self.threshold <= 100:
            raise ValueError(f"threshold must be between 0 and 100, got {self.threshold}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")


@dataclass
class DocumentReport:
    """
    Report line for one document.

    Attributes:
        document_id: Storage identifier
        label: Title/company label for humans
        outcome: Terminal state reached
        length_before: Length of the text that was processed
        length_after: Length of the resulting text
        score_before: AI-score before humanization (humanize runs only)
        score_after: AI-score after humanization (humanize runs only)
        excerpt: Before/after window around the first change
        error: Error message when outcome is ERROR
        persisted: Whether the change was saved
    """

    document_id: str
    outcome: DocumentOutcome
    label: Optional[str] = None
    length_before: int = 0
    length_after: int = 0
    score_before: Optional[int] = None
    score_after: Optional[int] = None
    excerpt: Optional[ChangeExcerpt] = None
    error: Optional[str] = None
    persisted: bool = False


@dataclass
class MaintenanceRunResult:
    """
    Aggregate results from one maintenance run.

    Attributes:
        operation: "format" or "humanize"
        run_id: Identifier bound to every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        dry_run: Whether saving was disabled
        threshold: Humanization gate used
        reports: One report per processed document
        fetched: Documents returned by the store
        not_started: Documents never scheduled because the run was cancelled
        cancelled: Whether cancel() stopped the run early
        run_skipped: Whether the run did not start because another was in progress
        updated: Documents formatted or humanized
        failed: Documents with an error outcome
        skipped: Documents left unchanged
        score_distribution: Count of documents per score bucket
    """

    operation: str
    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    dry_run: bool = False
    threshold: Optional[int] = None
    reports: List[DocumentReport] = field(default_factory=list)
    fetched: int = 0
    not_started: int = 0
    cancelled: bool = False
    run_skipped: bool = False
    total_duration_seconds: float = 0.0
    updated: int = 0
    failed: int = 0
    skipped: int = 0
    score_distribution: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        """Aggregate counts from the per-document reports."""
        if self.reports:
            self.updated = sum(1 for r in self.reports if r.outcome.is_update)
            self.failed = sum(1 for r in self.reports if r.outcome is DocumentOutcome.ERROR)
            self.skipped = sum(1 for r in self.reports if r.outcome is DocumentOutcome.UNCHANGED)

        if not self.score_distribution:
            self.score_distribution = score_distribution(
                r.score_before for r in self.reports if r.score_before is not None
            )

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def had_errors(self) -> bool:
        return self.failed > 0

    @property
    def summary(self) -> Dict[str, int]:
        return {"updated": self.updated, "failed": self.failed, "skipped": self.skipped}


def score_bucket(value: int) -> str:
    """Name of the distribution bucket containing ``value``.

    Example:
        >>> score_bucket(42)
        '30-50'
    """
    for name, low, high in SCORE_BUCKETS:
        if low <= value <= high:
            return name
    raise ValueError(f"Score out of range: {value}")


def score_distribution(scores) -> Dict[str, int]:
    """Count scores per bucket; every bucket is present, possibly with 0."""
    counts = {name: 0 for name, _, _ in SCORE_BUCKETS}
    for value in scores:
        counts[score_bucket(value)] += 1
    return counts
