"""Address autocomplete and verification proxy endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...schemas.geocoding import AddressVerificationModel, AddressVerifyRequest, PlaceCandidateModel
from ...services.geocoding import GeocodingService, get_geocoding_service

router = APIRouter(prefix="/geocoding", tags=["geocoding"])


@router.get("/suggest", response_model=List[PlaceCandidateModel], status_code=status.HTTP_200_OK)
def suggest_addresses(
    q: str = Query(default="", description="Partial address or postcode"),
    geocoder: GeocodingService = Depends(get_geocoding_service),
) -> List[PlaceCandidateModel]:
    return [PlaceCandidateModel.from_domain(candidate) for candidate in geocoder.suggest(q)]


@router.post("/verify", response_model=AddressVerificationModel, status_code=status.HTTP_200_OK)
def verify_address(
    payload: AddressVerifyRequest,
    geocoder: GeocodingService = Depends(get_geocoding_service),
) -> AddressVerificationModel:
    return AddressVerificationModel.from_domain(geocoder.verify(payload.address))
