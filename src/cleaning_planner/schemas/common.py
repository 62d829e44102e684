"""Shared request/response building blocks."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


class MessageResponse(BaseModel):
    message: str


class WritePayload(BaseModel):
    """Base for create/update bodies.

    Unknown keys are rejected. ``id`` and the timestamps are accepted so a
    client can send back a record it fetched, but they never reach the
    service.
    """

    model_config = ConfigDict(extra="forbid")

    non_nullable: ClassVar[tuple[str, ...]] = ()

    id: Any = Field(default=None, exclude=True)
    createdAt: Any = Field(default=None, exclude=True)
    updatedAt: Any = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "WritePayload":
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


def coerce_calendar_date(value: Any) -> Any:
    """Reduce ISO datetimes ("2024-02-05T00:00:00.000Z") to their date part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def parse_calendar_date(value: Any) -> date | None:
    """Best-effort date parse for stored values; ``None`` when unusable."""
    value = coerce_calendar_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


CalendarDate = Annotated[date, BeforeValidator(coerce_calendar_date)]
