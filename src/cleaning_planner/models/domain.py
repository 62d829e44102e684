"""Domain enums and value objects for customers, jobs and geocoding."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class JobStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


class Recurrence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


@dataclass(slots=True)
class PlaceCandidate:
    """A ranked geocoder match for a free-text query."""

    place_id: str
    display_name: str
    relevance: float
    latitude: float
    longitude: float
    postcode: Optional[str] = None


@dataclass(slots=True)
class AddressVerification:
    """Outcome of verifying a full address against the geocoder."""

    verified: bool
    message: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    relevance: Optional[float] = None
