"""Customer endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ...schemas.common import MessageResponse
from ...schemas.customers import (
    CustomerCreate,
    CustomerModel,
    CustomerUpdate,
    CustomerVerificationResponse,
)
from ...schemas.geocoding import AddressVerificationModel
from ...services.customers import CustomerService
from ...services.geocoding import GeocodingService, get_geocoding_service
from ..dependencies import get_customer_service

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=List[CustomerModel], status_code=status.HTTP_200_OK)
def list_customers(service: CustomerService = Depends(get_customer_service)) -> List[CustomerModel]:
    return service.list()


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerModel:
    return service.create(payload)


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer(customer_id: str, service: CustomerService = Depends(get_customer_service)) -> CustomerModel:
    return service.get(customer_id)


@router.put("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerModel:
    return service.update(customer_id, payload)


@router.delete("/{customer_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_customer(customer_id: str, service: CustomerService = Depends(get_customer_service)) -> MessageResponse:
    """Hard delete. Jobs that reference the customer are left in place."""
    service.delete(customer_id)
    return MessageResponse(message="Customer deleted successfully")


@router.post(
    "/{customer_id}/verify-address",
    response_model=CustomerVerificationResponse,
    status_code=status.HTTP_200_OK,
)
def verify_customer_address(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
    geocoder: GeocodingService = Depends(get_geocoding_service),
) -> CustomerVerificationResponse:
    customer, result = service.verify_address(customer_id, geocoder)
    return CustomerVerificationResponse(
        customer=customer,
        verification=AddressVerificationModel.from_domain(result),
    )
