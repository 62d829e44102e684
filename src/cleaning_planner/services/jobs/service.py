"""Job scheduling service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ...errors import ValidationError
from ...models.domain import JobStatus
from ...schemas.common import parse_calendar_date
from ...schemas.jobs import JobModel
from ..base import ResourceService, new_identifier, utc_now
from ..customers import CustomerService
from .recurrence import expand_recurring_jobs

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JobFilter:
    """Query narrowing for job listings.

    Only one dimension applies per call, the first present in this order:
    date range (both bounds required), customer, round, status.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    customer_id: Optional[str] = None
    round_id: Optional[str] = None
    status: Optional[JobStatus] = None

    def matches(self, raw: dict[str, Any]) -> bool:
        if self.start_date is not None and self.end_date is not None:
            scheduled = parse_calendar_date(raw.get("scheduledDate"))
            return scheduled is not None and self.start_date <= scheduled <= self.end_date
        if self.customer_id:
            return raw.get("customerId") == self.customer_id
        if self.round_id:
            return raw.get("roundId") == self.round_id
        if self.status is not None:
            return raw.get("status") == JobStatus(self.status).value
        return True


class JobService(ResourceService[JobModel]):
    collection = "jobs"
    label = "Job"
    record_model = JobModel

    def _customer_exists(self, customer_id: Any) -> bool:
        return bool(customer_id) and CustomerService(self.store).exists(customer_id)

    def _validate_create(self, fields: dict[str, Any]) -> None:
        if not self._customer_exists(fields.get("customerId")):
            raise ValidationError("Customer not found")

    def _validate_update(self, current: dict[str, Any], changes: dict[str, Any]) -> None:
        customer_id = changes.get("customerId")
        if customer_id and customer_id != current.get("customerId") and not self._customer_exists(customer_id):
            raise ValidationError("Customer not found")

    def list(self, job_filter: JobFilter | None = None) -> list[JobModel]:
        records = self._load()
        if job_filter is not None:
            records = [raw for raw in records if job_filter.matches(raw)]
        return [self._to_record(raw) for raw in records]

    def update_status(
        self,
        job_id: str,
        status: JobStatus | str | None,
        completion_notes: str | None = None,
    ) -> JobModel:
        """Set the status, and completion notes when given.

        An unknown id is reported before a missing or unknown status.
        """
        self.get(job_id)
        if not status:
            raise ValidationError("Status is required")
        try:
            status = JobStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown status '{status}'") from exc
        changes: dict[str, Any] = {"status": status}
        if completion_notes is not None:
            changes["completionNotes"] = completion_notes
        return self.apply_changes(job_id, changes)

    def generate_recurring(self, start_date: date | None, end_date: date | None) -> list[JobModel]:
        """Expand recurring templates into the window and persist the new jobs."""
        if start_date is None or end_date is None:
            raise ValidationError("Start and end dates are required")
        with self.store.locked(self.collection):
            records = self._load()
            generated = expand_recurring_jobs(
                records,
                start_date,
                end_date,
                now=utc_now(),
                id_factory=new_identifier,
            )
            if generated:
                records.extend(self._dump(job) for job in generated)
                self._save(records)
        logger.info(
            "Generated %d recurring jobs for %s..%s", len(generated), start_date.isoformat(), end_date.isoformat()
        )
        return generated
