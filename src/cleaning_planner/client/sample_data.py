"""Built-in demo records for offline previews of the planner views."""

from __future__ import annotations

import copy
from typing import Any

_TIMESTAMP = "2024-01-01T09:00:00Z"

SAMPLE_CUSTOMERS: list[dict[str, Any]] = [
    {
        "id": "sample-customer-1",
        "name": "Jane Whitfield",
        "address": "12 Marine Parade, Worthing BN11 3PN",
        "latitude": 50.8107,
        "longitude": -0.3681,
        "email": "jane.whitfield@example.com",
        "phone": "01903 000001",
        "notes": "Side gate code 1942",
        "verified": True,
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
    {
        "id": "sample-customer-2",
        "name": "Tom Ashdown",
        "address": "4 Preston Park Avenue, Brighton BN1 6HJ",
        "latitude": 50.8432,
        "longitude": -0.1476,
        "email": None,
        "phone": "01273 000002",
        "notes": None,
        "verified": True,
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
]

SAMPLE_ROUNDS: list[dict[str, Any]] = [
    {
        "id": "sample-round-1",
        "name": "Worthing round",
        "description": "Seafront and town centre",
        "color": "#1976d2",
        "dayOfWeek": 2,
        "area": {"center": {"latitude": 50.8118, "longitude": -0.3714}, "radius": 3.0},
        "customers": ["sample-customer-1"],
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
    {
        "id": "sample-round-2",
        "name": "Brighton round",
        "description": None,
        "color": "#388e3c",
        "dayOfWeek": 4,
        "area": None,
        "customers": ["sample-customer-2"],
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
]

SAMPLE_JOBS: list[dict[str, Any]] = [
    {
        "id": "sample-job-1",
        "customerId": "sample-customer-1",
        "roundId": "sample-round-1",
        "title": "Window cleaning",
        "description": "Front and rear, ground and first floor",
        "scheduledDate": "2024-01-02",
        "scheduledTime": "09:30",
        "duration": 45,
        "status": "scheduled",
        "recurrence": "monthly",
        "price": 25.0,
        "notes": None,
        "completionNotes": None,
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
    {
        "id": "sample-job-2",
        "customerId": "sample-customer-2",
        "roundId": "sample-round-2",
        "title": "Gutter clearing",
        "description": None,
        "scheduledDate": "2024-01-04",
        "scheduledTime": None,
        "duration": 90,
        "status": "completed",
        "recurrence": "none",
        "price": 60.0,
        "notes": "Bring the long ladder",
        "completionNotes": "Downpipe unblocked",
        "createdAt": _TIMESTAMP,
        "updatedAt": _TIMESTAMP,
    },
]

_SAMPLES = {
    "customers": SAMPLE_CUSTOMERS,
    "jobs": SAMPLE_JOBS,
    "rounds": SAMPLE_ROUNDS,
}


def sample_collection(name: str) -> list[dict[str, Any]]:
    """Fresh copy of the sample records for ``name``."""
    return copy.deepcopy(_SAMPLES[name])
