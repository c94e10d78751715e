"""Maintenance runs that format and humanize stored descriptions."""

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from jobdesc.config.models import PipelineConfig
from jobdesc.domain.models import DocumentRecord
from jobdesc.formatting import ensure_text, needs_formatting, sanitize, sanitize_and_format
from jobdesc.humanizer import humanize
from jobdesc.logging import get_logger
from jobdesc.logging.context import log_context, run_in_context
from jobdesc.scoring import score
from jobdesc.utils.excerpts import change_excerpt, truncate_text
from jobdesc.utils.hashing import content_fingerprint
from jobdesc.utils.timestamps import utc_now

from .models import BatchOptions, DocumentOutcome, DocumentReport, MaintenanceRunResult
from .store import DocumentStore

logger = get_logger(__name__, component="pipeline")

FORMAT = "format"
HUMANIZE = "humanize"

MAX_ERROR_LENGTH = 200


@dataclass(frozen=True)
class _PendingSave:
    """A computed change waiting to be written by the run's main thread."""

    description: Optional[str]
    raw_description: Optional[str]


@dataclass
class _Planned:
    report: DocumentReport
    save: Optional[_PendingSave] = None


class MaintenancePipeline:
    """
    Runs formatting or humanization over the documents of a store.

    Documents are fetched once, processed by a thread pool bounded by
    ``BatchOptions.concurrency`` and saved one at a time from the calling
    thread. A failure in one document is recorded in its report and never
    stops the others. Only one run executes at a time; an overlapping call
    returns immediately with ``run_skipped`` set.
    """

    def __init__(self, store: DocumentStore, config: Optional[PipelineConfig] = None):
        """
        Initialize the maintenance pipeline.

        Args:
            store: Storage collaborator to fetch from and save to
            config: Pipeline configuration (formatting and scoring settings)
        """
        self.store = store
        self.config = config or PipelineConfig()
        self._lock = threading.Lock()
        self._cancel = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    def cancel(self) -> None:
        """Stop scheduling new documents; documents already started finish."""
        self._cancel.set()
        logger.info("Cancellation requested", extra={"event": "maintenance.run.cancel_requested"})

    def run_formatting(self, options: Optional[BatchOptions] = None) -> MaintenanceRunResult:
        """
        Format stored descriptions that need it.

        Without ``force`` a document is formatted only if ``needs_formatting``
        flags it. With ``force`` every fetched document is re-formatted, from
        its stored raw copy when it has one. The raw copy is never replaced.

        Args:
            options: Run options (defaults to a non-forced, persisted run)

        Returns:
            MaintenanceRunResult with one report per document
        """
        options = options or BatchOptions()
        return self._run(
            FORMAT,
            options,
            lambda: self.store.fetch_for_formatting(
                limit=options.limit, source=options.source_filter, force=options.force
            ),
            self._plan_formatting,
        )

    def run_humanization(self, options: Optional[BatchOptions] = None) -> MaintenanceRunResult:
        """
        Humanize stored descriptions whose AI-score reaches the threshold.

        Args:
            options: Run options; ``threshold`` is the score gate

        Returns:
            MaintenanceRunResult with scores and a score distribution
        """
        options = options or BatchOptions(threshold=self.config.scoring.threshold)
        return self._run(
            HUMANIZE,
            options,
            lambda: self.store.fetch_for_humanization(
                limit=options.limit, source=options.source_filter
            ),
            self._plan_humanization,
        )

    def _run(
        self,
        operation: str,
        options: BatchOptions,
        fetch: Callable[[], List[DocumentRecord]],
        plan: Callable[[DocumentRecord, BatchOptions], _Planned],
    ) -> MaintenanceRunResult:
        run_started_at = utc_now()
        run_id = uuid4().hex

        if not self._lock.acquire(blocking=False):
            with log_context(run_id=run_id, operation=operation):
                logger.warning(
                    "Maintenance run skipped: previous run still in progress",
                    extra={"event": "maintenance.run.skipped", "reason": "lock_held"},
                )
            return MaintenanceRunResult(
                operation=operation,
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                dry_run=options.dry_run,
                run_skipped=True,
            )

        self._cancel.clear()
        try:
            with log_context(run_id=run_id, operation=operation):
                logger.info(
                    f"Maintenance run started: {operation}",
                    extra={
                        "event": "maintenance.run.started",
                        "dry_run": options.dry_run,
                        "force": options.force,
                        "limit": options.limit,
                        "threshold": options.threshold,
                        "source_filter": options.source_filter,
                        "concurrency": options.concurrency,
                    },
                )

                try:
                    documents = fetch()
                except Exception as e:
                    logger.error(
                        f"Could not fetch documents: {e}",
                        extra={"event": "maintenance.fetch.failed", "error_type": type(e).__name__},
                        exc_info=True,
                    )
                    raise

                reports = self._process_all(documents, options, plan)
                not_started = len(documents) - len(reports)

                result = MaintenanceRunResult(
                    operation=operation,
                    run_id=run_id,
                    run_started_at=run_started_at,
                    run_finished_at=utc_now(),
                    dry_run=options.dry_run,
                    threshold=options.threshold if operation == HUMANIZE else None,
                    reports=reports,
                    fetched=len(documents),
                    not_started=not_started,
                    cancelled=self._cancel.is_set(),
                )

                logger.info(
                    f"Maintenance run completed: {operation}",
                    extra={
                        "event": "maintenance.run.completed",
                        "duration_ms": int(result.total_duration_seconds * 1000),
                        "fetched": result.fetched,
                        "updated": result.updated,
                        "failed": result.failed,
                        "skipped": result.skipped,
                        "not_started": result.not_started,
                        "dry_run": result.dry_run,
                    },
                )
                return result
        finally:
            self._lock.release()

    def _process_all(
        self,
        documents: List[DocumentRecord],
        options: BatchOptions,
        plan: Callable[[DocumentRecord, BatchOptions], _Planned],
    ) -> List[DocumentReport]:
        reports: List[DocumentReport] = []
        queue = iter(documents)
        pending: Dict[Future, DocumentRecord] = {}

        with ThreadPoolExecutor(
            max_workers=options.concurrency, thread_name_prefix="jobdesc-worker"
        ) as executor:
            while True:
                while len(pending) < options.concurrency and not self._cancel.is_set():
                    record = next(queue, None)
                    if record is None:
                        break
                    future = executor.submit(run_in_context(self._plan_guarded, plan, record, options))
                    pending[future] = record

                if not pending:
                    break

                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    record = pending.pop(future)
                    reports.append(self._commit(record, future.result(), options))

        if self._cancel.is_set():
            logger.warning(
                "Maintenance run cancelled before all documents were scheduled",
                extra={
                    "event": "maintenance.run.cancelled",
                    "processed": len(reports),
                    "remaining": len(documents) - len(reports),
                },
            )
        return reports

    def _plan_guarded(
        self,
        plan: Callable[[DocumentRecord, BatchOptions], _Planned],
        record: DocumentRecord,
        options: BatchOptions,
    ) -> _Planned:
        with log_context(document_id=record.id):
            try:
                return plan(record, options)
            except Exception as e:
                logger.error(
                    f"Error processing document {record.id}: {e}",
                    extra={"event": "maintenance.document.failed", "error_type": type(e).__name__},
                    exc_info=True,
                )
                length = len(record.description or "")
                return _Planned(
                    DocumentReport(
                        document_id=record.id,
                        label=record.label,
                        outcome=DocumentOutcome.ERROR,
                        length_before=length,
                        length_after=length,
                        error=truncate_text(str(e), MAX_ERROR_LENGTH),
                    )
                )

    def _commit(self, record: DocumentRecord, planned: _Planned, options: BatchOptions) -> DocumentReport:
        report = planned.report
        with log_context(document_id=record.id):
            if planned.save is not None and not options.dry_run:
                try:
                    self.store.save_formatted(
                        record.id, planned.save.description, planned.save.raw_description
                    )
                    report = replace(report, persisted=True)
                except Exception as e:
                    logger.error(
                        f"Could not save document {record.id}: {e}",
                        extra={"event": "maintenance.document.save_failed", "error_type": type(e).__name__},
                        exc_info=True,
                    )
                    report = replace(
                        report,
                        outcome=DocumentOutcome.ERROR,
                        error=truncate_text(str(e), MAX_ERROR_LENGTH),
                    )

            logger.info(
                f"{report.document_id}: {report.outcome.value}",
                extra={
                    "event": "maintenance.document.completed",
                    "outcome": report.outcome.value,
                    "length_before": report.length_before,
                    "length_after": report.length_after,
                    "score_before": report.score_before,
                    "score_after": report.score_after,
                    "persisted": report.persisted,
                },
            )
        return report

    def _plan_formatting(self, record: DocumentRecord, options: BatchOptions) -> _Planned:
        current = record.description or ""
        from_raw = bool(options.force and record.raw_description)
        source_text = ensure_text(record.raw_description if from_raw else record.description)

        report = DocumentReport(
            document_id=record.id,
            label=record.label,
            outcome=DocumentOutcome.UNCHANGED,
            length_before=len(current),
            length_after=len(current),
        )
        formatting = self.config.formatting
        if not options.force and not needs_formatting(source_text, formatting.max_length):
            return _Planned(report)

        result = sanitize_and_format(
            source_text,
            force=options.force,
            words_per_minute=formatting.words_per_minute,
            header_max_length=formatting.header_max_length,
            max_length=formatting.max_length,
            highlight_salary=formatting.highlight_salary,
        )
        formatted = result.formatted_text
        # Spacing or case differences alone do not count as a change
        if content_fingerprint(formatted) == content_fingerprint(current):
            return _Planned(report)

        report.outcome = DocumentOutcome.FORMATTED
        report.length_after = len(formatted)
        report.excerpt = change_excerpt(current, formatted)
        return _Planned(
            report,
            _PendingSave(
                description=formatted or None,
                raw_description=record.raw_description or source_text,
            ),
        )

    def _plan_humanization(self, record: DocumentRecord, options: BatchOptions) -> _Planned:
        text = ensure_text(record.description)
        sanitized = sanitize(text)
        weights = self.config.scoring.weights
        before = score(sanitized, weights)

        report = DocumentReport(
            document_id=record.id,
            label=record.label,
            outcome=DocumentOutcome.UNCHANGED,
            length_before=len(text),
            length_after=len(text),
            score_before=before,
            score_after=before,
        )
        if before < options.threshold:
            return _Planned(report)

        rewritten = humanize(sanitized, weights=weights)
        if rewritten is sanitized or rewritten == sanitized:
            return _Planned(report)

        report.outcome = DocumentOutcome.HUMANIZED
        report.length_after = len(rewritten)
        report.score_after = score(rewritten, weights)
        report.excerpt = change_excerpt(text, rewritten)

        # The pre-rewrite text becomes the raw copy unless one is already stored
        return _Planned(report, _PendingSave(description=rewritten, raw_description=text))
