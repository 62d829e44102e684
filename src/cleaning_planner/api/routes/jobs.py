"""Job endpoints, including recurring job generation."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import JobStatus
from ...schemas.common import CalendarDate, MessageResponse
from ...schemas.jobs import (
    GenerateRecurringRequest,
    GenerateRecurringResponse,
    JobCreate,
    JobModel,
    JobStatusUpdate,
    JobUpdate,
)
from ...services.jobs import JobFilter, JobService
from ..dependencies import get_job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=List[JobModel], status_code=status.HTTP_200_OK)
def list_jobs(
    startDate: Optional[CalendarDate] = Query(default=None, description="Inclusive start of a date range filter"),
    endDate: Optional[CalendarDate] = Query(default=None, description="Inclusive end of a date range filter"),
    customerId: str | None = Query(default=None, description="Optional customer filter"),
    roundId: str | None = Query(default=None, description="Optional round filter"),
    status: JobStatus | None = Query(default=None, description="Optional status filter"),
    service: JobService = Depends(get_job_service),
) -> List[JobModel]:
    job_filter = JobFilter(
        start_date=startDate,
        end_date=endDate,
        customer_id=customerId,
        round_id=roundId,
        status=status,
    )
    return service.list(job_filter)


@router.post("", response_model=JobModel, status_code=status.HTTP_201_CREATED)
def create_job(payload: JobCreate, service: JobService = Depends(get_job_service)) -> JobModel:
    return service.create(payload)


@router.post("/generate-recurring", response_model=GenerateRecurringResponse, status_code=status.HTTP_200_OK)
def generate_recurring_jobs(
    payload: GenerateRecurringRequest,
    service: JobService = Depends(get_job_service),
) -> GenerateRecurringResponse:
    jobs = service.generate_recurring(payload.startDate, payload.endDate)
    return GenerateRecurringResponse(
        message=f"Generated {len(jobs)} recurring jobs",
        count=len(jobs),
        jobs=jobs,
    )


@router.get("/{job_id}", response_model=JobModel, status_code=status.HTTP_200_OK)
def get_job(job_id: str, service: JobService = Depends(get_job_service)) -> JobModel:
    return service.get(job_id)


@router.put("/{job_id}", response_model=JobModel, status_code=status.HTTP_200_OK)
def update_job(job_id: str, payload: JobUpdate, service: JobService = Depends(get_job_service)) -> JobModel:
    return service.update(job_id, payload)


@router.put("/{job_id}/status", response_model=JobModel, status_code=status.HTTP_200_OK)
def update_job_status(
    job_id: str,
    payload: JobStatusUpdate,
    service: JobService = Depends(get_job_service),
) -> JobModel:
    return service.update_status(job_id, payload.status, payload.completionNotes)


@router.delete("/{job_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_job(job_id: str, service: JobService = Depends(get_job_service)) -> MessageResponse:
    service.delete(job_id)
    return MessageResponse(message="Job deleted successfully")
