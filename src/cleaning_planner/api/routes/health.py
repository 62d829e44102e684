"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...errors import StorageError
from ...persistence.filesystem import RecordStore, get_record_store
from ...services.geocoding import GeocodingService, check_health, get_geocoding_service

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/storage", status_code=status.HTTP_200_OK)
def health_storage(store: RecordStore = Depends(get_record_store)) -> dict:
    """Check that every collection file can be read."""
    try:
        return {"healthy": True, "data_root": str(store.root), "collections": store.counts()}
    except StorageError as exc:
        return {"healthy": False, "data_root": str(store.root), "error": exc.message}


@router.get("/health/geocoder", status_code=status.HTTP_200_OK)
def health_geocoder(
    probe: bool = False,
    geocoder: GeocodingService = Depends(get_geocoding_service),
) -> dict:
    """Report whether a geocoder is configured; ``probe=true`` also calls it."""
    result: dict = {"service": "geocoder", "configured": geocoder.configured}
    if probe and geocoder.client is not None:
        result["healthy"] = check_health(geocoder.client)
    return result
