"""Interval scheduling of maintenance runs."""

import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from jobdesc.config.models import MaintenanceOperation
from jobdesc.logging import get_logger
from jobdesc.pipeline import BatchOptions, MaintenancePipeline, MaintenanceRunResult

logger = get_logger(__name__, component="scheduler")

JOB_ID = "description-maintenance"


class MaintenanceJob:
    """
    Callable that runs the configured operations in order.

    A failure in one operation is logged and does not prevent the next one,
    and never propagates into the scheduler thread.
    """

    def __init__(
        self,
        pipeline: MaintenancePipeline,
        operations: Sequence[MaintenanceOperation],
        options: BatchOptions,
    ):
        self.pipeline = pipeline
        self.operations = list(operations)
        self.options = options

    def __call__(self) -> List[MaintenanceRunResult]:
        results = []
        for operation in self.operations:
            try:
                if operation == MaintenanceOperation.FORMAT:
                    results.append(self.pipeline.run_formatting(self.options))
                else:
                    results.append(self.pipeline.run_humanization(self.options))
            except Exception as e:
                logger.error(
                    f"Scheduled {MaintenanceOperation(operation).value} run failed: {e}",
                    extra={
                        "event": "scheduler.job.failed",
                        "operation": MaintenanceOperation(operation).value,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
        return results


class SchedulerService:
    """
    Wraps APScheduler to trigger maintenance at a fixed interval.

    Uses BackgroundScheduler so the main thread stays free to handle
    signals and coordinate shutdown.
    """

    def __init__(
        self,
        job: Callable[[], object],
        interval_seconds: int,
        shutdown_event: Optional[threading.Event] = None,
        run_immediately: bool = True,
    ):
        """
        Initialize the scheduler service.

        Args:
            job: Function to call on each scheduled run (e.g. a MaintenanceJob)
            interval_seconds: Interval between runs in seconds
            shutdown_event: Optional event to set on shutdown for coordination
            run_immediately: Fire the first run at start instead of after one interval
        """
        self.job = job
        self.interval_seconds = interval_seconds
        self.shutdown_event = shutdown_event
        self.run_immediately = run_immediately

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,
                "coalesce": True,
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def start(self) -> None:
        """Register the maintenance job and start the scheduler thread."""
        trigger = IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc)
        first_run = datetime.now(timezone.utc) if self.run_immediately else None

        job_kwargs = {"next_run_time": first_run} if first_run is not None else {}
        self.scheduler.add_job(
            func=self.job,
            trigger=trigger,
            id=JOB_ID,
            name="Job description maintenance",
            replace_existing=True,
            **job_kwargs,
        )
        self.scheduler.start()

        logger.info(
            f"Scheduler started with interval: {self.interval_seconds} seconds",
            extra={
                "event": "scheduler.started",
                "interval_seconds": self.interval_seconds,
                "next_run_time": (
                    self.get_next_run_time().isoformat() if self.get_next_run_time() else None
                ),
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop the scheduler.

        Args:
            wait: If True, wait for a running job to complete before returning
        """
        logger.info(
            "Shutting down scheduler",
            extra={"event": "scheduler.stopping", "wait_for_jobs": wait},
        )

        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)

        if self.shutdown_event:
            self.shutdown_event.set()

        logger.info("Scheduler shutdown complete", extra={"event": "scheduler.stopped"})

    def trigger_now(self) -> object:
        """Run the job synchronously in the calling thread."""
        logger.info("Triggering immediate maintenance run", extra={"event": "scheduler.trigger_now"})
        return self.job()

    def is_running(self) -> bool:
        return self.scheduler.running

    def get_next_run_time(self) -> Optional[datetime]:
        job = self.scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None
