"""Customer-facing API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from .common import WritePayload
from .geocoding import AddressVerificationModel


class CustomerModel(BaseModel):
    id: str
    name: str
    address: str
    latitude: float = 0.0
    longitude: float = 0.0
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    verified: bool = False
    createdAt: datetime
    updatedAt: datetime


class CustomerCreate(WritePayload):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    latitude: float = Field(default=0.0, ge=-90.0, le=90.0)
    longitude: float = Field(default=0.0, ge=-180.0, le=180.0)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    verified: bool = False


class CustomerUpdate(WritePayload):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "address", "latitude", "longitude", "verified")

    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    verified: Optional[bool] = None


class CustomerVerificationResponse(BaseModel):
    customer: CustomerModel
    verification: AddressVerificationModel
