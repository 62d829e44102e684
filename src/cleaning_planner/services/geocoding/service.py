"""Address autocomplete and verification on top of the geocoding client."""

from __future__ import annotations

import logging
import re

from ...config import settings
from ...errors import UpstreamError
from ...models.domain import AddressVerification, PlaceCandidate
from .client import GeocodingClient

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
PARTIAL_POSTCODE_PATTERN = re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]?$", re.IGNORECASE)


def should_query(query: str) -> bool:
    """Whether a query is long enough to send upstream.

    Partial UK postcodes ("N1", "BN11") are allowed below the usual minimum.
    """
    query = (query or "").strip()
    if not query:
        return False
    return len(query) >= MIN_QUERY_LENGTH or bool(PARTIAL_POSTCODE_PATTERN.match(query))


class GeocodingService:
    def __init__(self, client: GeocodingClient | None = None, confidence_threshold: float | None = None) -> None:
        self._client = client
        self.confidence_threshold = (
            confidence_threshold if confidence_threshold is not None else settings.geocoder_confidence_threshold
        )

    @property
    def client(self) -> GeocodingClient | None:
        if self._client is None and settings.geocoder_configured:
            self._client = GeocodingClient()
        return self._client

    @property
    def configured(self) -> bool:
        return self.client is not None

    def suggest(self, query: str) -> list[PlaceCandidate]:
        if not should_query(query):
            return []
        client = self.client
        if client is None:
            logger.warning("Address suggestions requested but no geocoder is configured")
            return []
        try:
            return client.forward(query, autocomplete=True)
        except UpstreamError as exc:
            logger.warning("Address suggestions unavailable for %r: %s", query, exc)
            return []

    def verify(self, address: str) -> AddressVerification:
        """Verified only when the best match reaches the confidence threshold."""
        client = self.client
        if client is None:
            return AddressVerification(verified=False, message="Address verification is not configured")
        try:
            candidates = client.forward(address, autocomplete=False)
        except UpstreamError as exc:
            logger.warning("Address verification failed for %r: %s", address, exc)
            return AddressVerification(verified=False, message="Address verification is currently unavailable")

        if not candidates:
            return AddressVerification(verified=False, message="No matching address found")

        best = max(candidates, key=lambda candidate: candidate.relevance)
        if best.relevance < self.confidence_threshold:
            return AddressVerification(
                verified=False,
                message="Unable to verify this address. Please check and try again.",
                relevance=best.relevance,
            )
        return AddressVerification(
            verified=True,
            message=f"Address verified: {best.display_name}",
            address=best.display_name,
            latitude=best.latitude,
            longitude=best.longitude,
            relevance=best.relevance,
        )


def get_geocoding_service() -> GeocodingService:
    return GeocodingService()
