"""HTTP client for a Mapbox-compatible forward geocoding API."""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from ...config import settings
from ...errors import UpstreamError
from ...models.domain import PlaceCandidate

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def _postcode_of(feature: dict[str, Any]) -> str | None:
    if "postcode" in (feature.get("place_type") or []):
        return feature.get("text")
    for context in feature.get("context") or []:
        if str(context.get("id", "")).startswith("postcode"):
            return context.get("text")
    return None


def parse_feature(feature: dict[str, Any]) -> PlaceCandidate | None:
    """Convert one GeoJSON feature to a candidate; ``None`` if it has no usable centre."""
    center = feature.get("center") or (feature.get("geometry") or {}).get("coordinates")
    if not center or len(center) < 2:
        return None
    longitude, latitude = float(center[0]), float(center[1])
    return PlaceCandidate(
        place_id=str(feature.get("id", "")),
        display_name=feature.get("place_name") or feature.get("text") or "",
        relevance=float(feature.get("relevance") or 0.0),
        latitude=latitude,
        longitude=longitude,
        postcode=_postcode_of(feature),
    )


class GeocodingClient:
    def __init__(
        self,
        base_url: str | None = None,
        access_token: str | None = None,
        country: str | None = None,
        types: str | None = None,
        limit: int | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self.access_token = access_token or settings.geocoder_access_token
        if not self.access_token:
            raise ValueError("Geocoding access token is not configured.")
        self.country = country if country is not None else settings.geocoder_country
        self.types = types if types is not None else settings.geocoder_types
        self.limit = limit or settings.geocoder_limit
        self.timeout = timeout or settings.geocoder_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocoder_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoder_backoff_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self.transport,
        )

    def _request(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as exc:
                    status_code = exc.response.status_code
                    if status_code not in RETRYABLE_STATUS_CODES or attempt >= self.max_retries:
                        raise UpstreamError(f"Geocoding request failed with HTTP {status_code}") from exc
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    if attempt >= self.max_retries:
                        raise UpstreamError(f"Geocoding service is not reachable: {exc}") from exc
                except ValueError as exc:
                    raise UpstreamError("Geocoding response was not valid JSON") from exc
                attempt += 1
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(f"Geocoding request failed, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                time.sleep(wait_time)
        finally:
            client.close()

    def forward(self, query: str, *, autocomplete: bool = True) -> list[PlaceCandidate]:
        """Ranked candidates for a free-text address or postcode query."""
        url = f"{self.base_url}/{quote(query.strip(), safe='')}.json"
        params: dict[str, Any] = {
            "access_token": self.access_token,
            "autocomplete": "true" if autocomplete else "false",
            "limit": self.limit,
        }
        if self.country:
            params["country"] = self.country
        if self.types:
            params["types"] = self.types

        payload = self._request(url, params)
        features = payload.get("features")
        if not isinstance(features, list):
            raise UpstreamError("Geocoding response is missing features")
        candidates = [candidate for candidate in map(parse_feature, features) if candidate is not None]
        candidates.sort(key=lambda candidate: candidate.relevance, reverse=True)
        return candidates


def check_health(client: GeocodingClient | None = None) -> bool:
    """True when the provider answers a trivial query."""
    try:
        (client or GeocodingClient()).forward("London", autocomplete=False)
        return True
    except (UpstreamError, ValueError) as exc:
        logger.warning(f"Geocoder health check failed: {exc}")
        return False
