"""Job scheduling API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import JobStatus, Recurrence
from .common import CalendarDate, WritePayload

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class JobModel(BaseModel):
    id: str
    customerId: str
    roundId: Optional[str] = None
    title: str
    description: Optional[str] = None
    scheduledDate: CalendarDate
    scheduledTime: Optional[str] = None
    duration: int = 60
    status: JobStatus = JobStatus.SCHEDULED
    recurrence: Recurrence = Recurrence.NONE
    price: Optional[float] = None
    notes: Optional[str] = None
    completionNotes: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime


class JobCreate(WritePayload):
    customerId: str = Field(min_length=1)
    roundId: Optional[str] = None
    title: str = Field(min_length=1)
    description: Optional[str] = None
    scheduledDate: CalendarDate
    scheduledTime: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    duration: int = Field(default=60, gt=0)
    status: JobStatus = JobStatus.SCHEDULED
    recurrence: Recurrence = Recurrence.NONE
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    completionNotes: Optional[str] = None


class JobUpdate(WritePayload):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "customerId",
        "title",
        "scheduledDate",
        "duration",
        "status",
        "recurrence",
    )

    customerId: Optional[str] = Field(default=None, min_length=1)
    roundId: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    scheduledDate: Optional[CalendarDate] = None
    scheduledTime: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    duration: Optional[int] = Field(default=None, gt=0)
    status: Optional[JobStatus] = None
    recurrence: Optional[Recurrence] = None
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    completionNotes: Optional[str] = None


class JobStatusUpdate(BaseModel):
    status: Optional[JobStatus] = None
    completionNotes: Optional[str] = None


class GenerateRecurringRequest(BaseModel):
    startDate: Optional[CalendarDate] = None
    endDate: Optional[CalendarDate] = None


class GenerateRecurringResponse(BaseModel):
    message: str
    count: int
    jobs: List[JobModel]
