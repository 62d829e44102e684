"""Round endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ...schemas.common import MessageResponse
from ...schemas.customers import CustomerModel
from ...schemas.rounds import RoundCreate, RoundModel, RoundUpdate
from ...services.rounds import RoundService
from ..dependencies import get_round_service

router = APIRouter(prefix="/rounds", tags=["rounds"])


@router.get("", response_model=List[RoundModel], status_code=status.HTTP_200_OK)
def list_rounds(service: RoundService = Depends(get_round_service)) -> List[RoundModel]:
    return service.list()


@router.post("", response_model=RoundModel, status_code=status.HTTP_201_CREATED)
def create_round(payload: RoundCreate, service: RoundService = Depends(get_round_service)) -> RoundModel:
    return service.create(payload)


@router.get("/{round_id}", response_model=RoundModel, status_code=status.HTTP_200_OK)
def get_round(round_id: str, service: RoundService = Depends(get_round_service)) -> RoundModel:
    return service.get(round_id)


@router.put("/{round_id}", response_model=RoundModel, status_code=status.HTTP_200_OK)
def update_round(round_id: str, payload: RoundUpdate, service: RoundService = Depends(get_round_service)) -> RoundModel:
    return service.update(round_id, payload)


@router.delete("/{round_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_round(round_id: str, service: RoundService = Depends(get_round_service)) -> MessageResponse:
    service.delete(round_id)
    return MessageResponse(message="Round deleted successfully")


@router.get("/{round_id}/customers", response_model=List[CustomerModel], status_code=status.HTTP_200_OK)
def list_round_customers(round_id: str, service: RoundService = Depends(get_round_service)) -> List[CustomerModel]:
    return service.members(round_id)
