"""Expansion of recurring job templates into dated occurrences."""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Iterable, Iterator, Optional

from ...errors import ValidationError
from ...models.domain import JobStatus, Recurrence
from ...schemas.common import parse_calendar_date
from ...schemas.jobs import JobModel

logger = logging.getLogger(__name__)

STEP_DAYS = {
    Recurrence.DAILY: 1,
    Recurrence.WEEKLY: 7,
    Recurrence.BIWEEKLY: 14,
}

# Fields a generated occurrence inherits from its template.
INHERITED_FIELDS = ("customerId", "roundId", "title", "description", "scheduledTime", "price", "notes")


def add_months(anchor: date, months: int) -> date:
    """Shift ``anchor`` by whole calendar months, clamping to the month's last day."""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def occurrence(anchor: date, recurrence: Recurrence, index: int) -> date:
    """The ``index``-th occurrence of a series starting at ``anchor`` (index 0)."""
    if recurrence is Recurrence.MONTHLY:
        return add_months(anchor, index)
    return anchor + timedelta(days=STEP_DAYS[recurrence] * index)


def iter_occurrences(anchor: date, recurrence: Recurrence, start: date, end: date) -> Iterator[date]:
    """Occurrences of the series that fall within ``[start, end]``."""
    if recurrence is Recurrence.NONE:
        return
    if recurrence is Recurrence.MONTHLY:
        index = max(0, (start.year - anchor.year) * 12 + start.month - anchor.month - 1)
        while add_months(anchor, index) < start:
            index += 1
    else:
        step = STEP_DAYS[recurrence]
        index = max(0, -(-(start - anchor).days // step))
    current = occurrence(anchor, recurrence, index)
    while current <= end:
        yield current
        index += 1
        current = occurrence(anchor, recurrence, index)


def _dedupe_key(customer_id: Any, title: Any, day: date) -> tuple[Any, Any, date]:
    return (customer_id, title, day)


def _template_recurrence(raw: dict[str, Any]) -> Optional[Recurrence]:
    value = raw.get("recurrence") or Recurrence.NONE.value
    try:
        return Recurrence(value)
    except ValueError:
        logger.warning("Skipping job %s with unknown recurrence %r", raw.get("id"), value)
        return None


def expand_recurring_jobs(
    jobs: Iterable[dict[str, Any]],
    start: date,
    end: date,
    *,
    now: datetime,
    id_factory: Callable[[], str],
) -> list[JobModel]:
    """Materialise occurrences of recurring templates between ``start`` and ``end``.

    Templates are jobs with a recurrence other than ``none`` scheduled
    strictly before ``start``. An occurrence is skipped when a job for the
    same customer with the same title already exists on that date, counting
    occurrences generated earlier in the same call.
    """
    if start > end:
        raise ValidationError("startDate must be on or before endDate")

    jobs = list(jobs)
    taken: set[tuple[Any, Any, date]] = set()
    for raw in jobs:
        scheduled = parse_calendar_date(raw.get("scheduledDate"))
        if scheduled is not None:
            taken.add(_dedupe_key(raw.get("customerId"), raw.get("title"), scheduled))

    generated: list[JobModel] = []
    for template in jobs:
        recurrence = _template_recurrence(template)
        if recurrence is None or recurrence is Recurrence.NONE:
            continue
        anchor = parse_calendar_date(template.get("scheduledDate"))
        if anchor is None:
            logger.warning("Skipping recurring job %s with unreadable date %r", template.get("id"), template.get("scheduledDate"))
            continue
        if anchor >= start:
            continue

        for day in iter_occurrences(anchor, recurrence, start, end):
            key = _dedupe_key(template.get("customerId"), template.get("title"), day)
            if key in taken:
                continue
            taken.add(key)
            fields = {name: template.get(name) for name in INHERITED_FIELDS}
            generated.append(
                JobModel(
                    **fields,
                    id=id_factory(),
                    scheduledDate=day,
                    duration=template.get("duration", 60),
                    status=JobStatus.SCHEDULED,
                    recurrence=recurrence,
                    createdAt=now,
                    updatedAt=now,
                )
            )
    return generated
