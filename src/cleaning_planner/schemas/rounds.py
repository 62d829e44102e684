"""Round (service route) API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field

from .common import WritePayload


class GeoPointModel(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class RoundAreaModel(BaseModel):
    center: GeoPointModel
    radius: Optional[float] = Field(default=None, gt=0, description="Radius in kilometres.")


class RoundModel(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    dayOfWeek: Optional[int] = None
    area: Optional[RoundAreaModel] = None
    customers: Optional[List[str]] = None
    createdAt: datetime
    updatedAt: datetime


class RoundCreate(WritePayload):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    dayOfWeek: Optional[int] = Field(default=None, ge=0, le=6, description="0 is Sunday.")
    area: Optional[RoundAreaModel] = None
    customers: Optional[List[str]] = None


class RoundUpdate(WritePayload):
    non_nullable: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    dayOfWeek: Optional[int] = Field(default=None, ge=0, le=6)
    area: Optional[RoundAreaModel] = None
    customers: Optional[List[str]] = None
