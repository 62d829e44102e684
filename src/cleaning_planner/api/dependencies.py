"""FastAPI dependency providers for services."""

from __future__ import annotations

from fastapi import Depends

from ..persistence.filesystem import RecordStore, get_record_store
from ..services.customers import CustomerService
from ..services.jobs import JobService
from ..services.rounds import RoundService


def get_customer_service(store: RecordStore = Depends(get_record_store)) -> CustomerService:
    return CustomerService(store)


def get_job_service(store: RecordStore = Depends(get_record_store)) -> JobService:
    return JobService(store)


def get_round_service(store: RecordStore = Depends(get_record_store)) -> RoundService:
    return RoundService(store)
