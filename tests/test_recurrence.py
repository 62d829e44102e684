import itertools
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from cleaning_planner.errors import ValidationError
from cleaning_planner.models.domain import JobStatus, Recurrence
from cleaning_planner.persistence.filesystem import RecordStore
from cleaning_planner.services.jobs import JobService, add_months, expand_recurring_jobs, iter_occurrences

NOW = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)


def _template(job_id: str, scheduled: str, recurrence: str, **overrides) -> dict:
    raw = {
        "id": job_id,
        "customerId": "C1",
        "roundId": "R1",
        "title": "Window cleaning",
        "description": "Front and back",
        "scheduledDate": scheduled,
        "scheduledTime": "09:30",
        "duration": 45,
        "status": "completed",
        "recurrence": recurrence,
        "price": 20.0,
        "notes": "Gate code 1942",
        "completionNotes": "Done",
        "createdAt": "2024-01-01T09:00:00Z",
        "updatedAt": "2024-01-01T09:00:00Z",
    }
    raw.update(overrides)
    return raw


def _expand(jobs, start: date, end: date):
    counter = itertools.count(1)
    return expand_recurring_jobs(jobs, start, end, now=NOW, id_factory=lambda: f"new-{next(counter)}")


def test_weekly_template_rolls_forward_into_february():
    generated = _expand([_template("T1", "2024-01-01", "weekly")], date(2024, 2, 1), date(2024, 2, 29))

    assert [job.scheduledDate for job in generated] == [
        date(2024, 2, 5),
        date(2024, 2, 12),
        date(2024, 2, 19),
        date(2024, 2, 26),
    ]


def test_generated_jobs_copy_template_fields():
    generated = _expand([_template("T1", "2024-01-01", "weekly")], date(2024, 2, 1), date(2024, 2, 7))

    job = generated[0]
    assert job.id == "new-1"
    assert job.customerId == "C1"
    assert job.roundId == "R1"
    assert job.title == "Window cleaning"
    assert job.description == "Front and back"
    assert job.scheduledTime == "09:30"
    assert job.duration == 45
    assert job.price == 20.0
    assert job.notes == "Gate code 1942"
    assert job.recurrence is Recurrence.WEEKLY
    assert job.status is JobStatus.SCHEDULED
    assert job.completionNotes is None
    assert job.createdAt == job.updatedAt == NOW


@pytest.mark.parametrize(
    ("recurrence", "expected_count"),
    [("daily", 29), ("weekly", 4), ("biweekly", 2), ("monthly", 1)],
)
def test_every_frequency_terminates_inside_window(recurrence, expected_count):
    start, end = date(2024, 2, 1), date(2024, 2, 29)

    generated = _expand([_template("T1", "2023-11-20", recurrence)], start, end)

    assert len(generated) == expected_count
    assert all(start <= job.scheduledDate <= end for job in generated)


def test_rerun_over_result_generates_nothing():
    jobs = [_template("T1", "2024-01-01", "weekly"), _template("T2", "2024-01-03", "daily", title="Bins")]
    start, end = date(2024, 2, 1), date(2024, 2, 29)

    first = _expand(jobs, start, end)
    combined = jobs + [job.model_dump(mode="json") for job in first]
    second = _expand(combined, start, end)

    assert first
    assert second == []


def test_existing_job_with_same_customer_title_and_date_is_skipped():
    existing = _template("E1", "2024-02-12", "none", roundId="OTHER", scheduledTime="14:00")

    generated = _expand([_template("T1", "2024-01-01", "weekly"), existing], date(2024, 2, 1), date(2024, 2, 29))

    assert date(2024, 2, 12) not in [job.scheduledDate for job in generated]
    assert len(generated) == 3


def test_two_templates_with_same_key_generate_once_per_day():
    jobs = [_template("T1", "2024-01-01", "weekly"), _template("T2", "2024-01-22", "weekly", roundId="R2")]

    generated = _expand(jobs, date(2024, 2, 1), date(2024, 2, 7))

    assert [job.scheduledDate for job in generated] == [date(2024, 2, 5)]


def test_templates_on_or_after_start_are_not_expanded():
    jobs = [_template("T1", "2024-02-01", "daily"), _template("T2", "2024-02-10", "weekly")]

    assert _expand(jobs, date(2024, 2, 1), date(2024, 2, 29)) == []


def test_unknown_recurrence_and_bad_dates_are_skipped():
    jobs = [
        _template("T1", "2024-01-01", "fortnightly"),
        _template("T2", "not-a-date", "weekly"),
        _template("T3", "2024-01-01", None),
    ]

    assert _expand(jobs, date(2024, 2, 1), date(2024, 2, 29)) == []


def test_reversed_window_is_rejected():
    with pytest.raises(ValidationError):
        _expand([], date(2024, 3, 1), date(2024, 2, 1))


def test_single_day_window():
    generated = _expand([_template("T1", "2024-01-01", "weekly")], date(2024, 2, 5), date(2024, 2, 5))

    assert [job.scheduledDate for job in generated] == [date(2024, 2, 5)]


def test_monthly_occurrences_clamp_without_drifting():
    occurrences = list(iter_occurrences(date(2024, 1, 31), Recurrence.MONTHLY, date(2024, 2, 1), date(2024, 5, 31)))

    assert occurrences == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30), date(2024, 5, 31)]


def test_add_months_crosses_year_boundary():
    assert add_months(date(2023, 11, 30), 3) == date(2024, 2, 29)
    assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)


def test_service_persists_generated_jobs_with_single_save(tmp_path: Path, monkeypatch):
    store = RecordStore(root=tmp_path)
    store.save("jobs", [_template("T1", "2024-01-01", "weekly")])
    saves = []
    original_save = store.save

    def counting_save(collection, records, **kwargs):
        saves.append(collection)
        original_save(collection, records, **kwargs)

    monkeypatch.setattr(store, "save", counting_save)
    service = JobService(store)

    generated = service.generate_recurring(date(2024, 2, 1), date(2024, 2, 29))

    assert len(generated) == 4
    assert saves == ["jobs"]
    stored = store.load("jobs")
    assert [raw["scheduledDate"] for raw in stored] == ["2024-01-01", "2024-02-05", "2024-02-12", "2024-02-19", "2024-02-26"]

    assert service.generate_recurring(date(2024, 2, 1), date(2024, 2, 29)) == []
    assert saves == ["jobs"]


def test_service_requires_both_dates(tmp_path: Path):
    with pytest.raises(ValidationError, match="required"):
        JobService(RecordStore(root=tmp_path)).generate_recurring(date(2024, 2, 1), None)


def test_generated_duration_copies_stored_value_and_defaults_when_absent():
    zero = _template("T1", "2024-01-01", "weekly", duration=0)
    absent = _template("T2", "2024-01-01", "weekly", title="Bins")
    del absent["duration"]

    generated = _expand([zero, absent], date(2024, 2, 5), date(2024, 2, 5))

    assert {job.title: job.duration for job in generated} == {"Window cleaning": 0, "Bins": 60}
