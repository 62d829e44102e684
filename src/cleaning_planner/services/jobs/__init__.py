"""Job scheduling services."""

from .recurrence import add_months, expand_recurring_jobs, iter_occurrences
from .service import JobFilter, JobService

__all__ = [
    "JobFilter",
    "JobService",
    "expand_recurring_jobs",
    "iter_occurrences",
    "add_months",
]
