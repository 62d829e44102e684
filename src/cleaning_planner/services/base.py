"""Generic CRUD service over one JSON collection."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..errors import NotFoundError, ValidationError
from ..persistence.filesystem import RecordStore, get_record_store

RecordT = TypeVar("RecordT", bound=BaseModel)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None) -> datetime:
    """Current time, nudged forward so it is strictly after ``previous``."""
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def new_identifier() -> str:
    return str(uuid.uuid4())


class ResourceService(Generic[RecordT]):
    """Load-modify-save CRUD over a collection of camelCase JSON records.

    Every call reloads the collection from the store, so instances hold no
    state between requests. Writes hold the collection lock for the whole
    cycle.
    """

    collection: ClassVar[str]
    label: ClassVar[str]
    record_model: ClassVar[type[BaseModel]]

    def __init__(self, store: RecordStore | None = None) -> None:
        self.store = store or get_record_store()

    def _load(self) -> list[dict[str, Any]]:
        return self.store.load(self.collection)

    def _save(self, records: list[dict[str, Any]]) -> None:
        self.store.save(self.collection, records)

    def _to_record(self, raw: Mapping[str, Any]) -> RecordT:
        return self.record_model.model_validate(raw)  # type: ignore[return-value]

    @staticmethod
    def _dump(record: BaseModel) -> dict[str, Any]:
        return record.model_dump(mode="json")

    def _index_of(self, records: list[dict[str, Any]], record_id: str) -> int:
        for index, raw in enumerate(records):
            if raw.get("id") == record_id:
                return index
        raise NotFoundError(f"{self.label} not found")

    # Hooks for resource specific checks; raise ValidationError to reject.
    def _validate_create(self, fields: dict[str, Any]) -> None:
        return None

    def _validate_update(self, current: dict[str, Any], changes: dict[str, Any]) -> None:
        return None

    def list(self) -> list[RecordT]:
        return [self._to_record(raw) for raw in self._load()]

    def get(self, record_id: str) -> RecordT:
        records = self._load()
        return self._to_record(records[self._index_of(records, record_id)])

    def create(self, payload: BaseModel) -> RecordT:
        fields = payload.model_dump()
        with self.store.locked(self.collection):
            self._validate_create(fields)
            now = utc_now()
            record = self._to_record({**fields, "id": new_identifier(), "createdAt": now, "updatedAt": now})
            records = self._load()
            records.append(self._dump(record))
            self._save(records)
        logger.info("Created %s %s", self.label.lower(), record.id)  # type: ignore[attr-defined]
        return record

    def update(self, record_id: str, payload: BaseModel) -> RecordT:
        """Shallow merge of the keys present in ``payload`` over the stored record."""
        return self.apply_changes(record_id, payload.model_dump(exclude_unset=True))

    def apply_changes(
        self,
        record_id: str,
        changes: dict[str, Any],
        expected: Mapping[str, Any] | None = None,
    ) -> RecordT:
        """Merge ``changes`` into the stored record.

        ``expected`` holds field values the stored record must still have;
        a mismatch raises ``ValidationError`` and nothing is written.
        """
        with self.store.locked(self.collection):
            records = self._load()
            index = self._index_of(records, record_id)
            current = records[index]
            for name, value in (expected or {}).items():
                if current.get(name) != value:
                    raise ValidationError(f"{self.label} {name} changed while the update was in progress")
            self._validate_update(current, changes)
            previous = self._to_record(current)
            merged = {
                **current,
                **changes,
                "id": current["id"],
                "createdAt": current.get("createdAt"),
                "updatedAt": next_timestamp(previous.updatedAt),  # type: ignore[attr-defined]
            }
            record = self._to_record(merged)
            records[index] = self._dump(record)
            self._save(records)
        logger.debug("Updated %s %s fields=%s", self.label.lower(), record_id, sorted(changes))
        return record

    def delete(self, record_id: str) -> None:
        with self.store.locked(self.collection):
            records = self._load()
            index = self._index_of(records, record_id)
            del records[index]
            self._save(records)
        logger.info("Deleted %s %s", self.label.lower(), record_id)
