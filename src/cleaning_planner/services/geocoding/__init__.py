"""Geocoding provider client and address verification."""

from .client import GeocodingClient, check_health, parse_feature
from .service import GeocodingService, get_geocoding_service, should_query

__all__ = [
    "GeocodingClient",
    "GeocodingService",
    "check_health",
    "get_geocoding_service",
    "parse_feature",
    "should_query",
]
