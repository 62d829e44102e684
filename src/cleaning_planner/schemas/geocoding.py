"""Address autocomplete and verification schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import AddressVerification, PlaceCandidate


class PlaceCandidateModel(BaseModel):
    id: str
    placeName: str
    relevance: float
    latitude: float
    longitude: float
    center: tuple[float, float]
    postcode: Optional[str] = None

    @classmethod
    def from_domain(cls, candidate: PlaceCandidate) -> "PlaceCandidateModel":
        return cls(
            id=candidate.place_id,
            placeName=candidate.display_name,
            relevance=candidate.relevance,
            latitude=candidate.latitude,
            longitude=candidate.longitude,
            center=(candidate.longitude, candidate.latitude),
            postcode=candidate.postcode,
        )


class AddressVerifyRequest(BaseModel):
    address: str = Field(min_length=1)


class AddressVerificationModel(BaseModel):
    verified: bool
    message: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    relevance: Optional[float] = None

    @classmethod
    def from_domain(cls, result: AddressVerification) -> "AddressVerificationModel":
        return cls(
            verified=result.verified,
            message=result.message,
            address=result.address,
            latitude=result.latitude,
            longitude=result.longitude,
            relevance=result.relevance,
        )
