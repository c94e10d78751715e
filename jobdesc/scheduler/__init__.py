"""Periodic execution of maintenance runs."""

from .service import JOB_ID, MaintenanceJob, SchedulerService

__all__ = [
    "SchedulerService",
    "MaintenanceJob",
    "JOB_ID",
]
