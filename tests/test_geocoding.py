"""Tests for the geocoding client and address verification service."""

import httpx
import pytest

from cleaning_planner.config import settings
from cleaning_planner.errors import UpstreamError
from cleaning_planner.models.domain import PlaceCandidate
from cleaning_planner.services.geocoding import (
    GeocodingClient,
    GeocodingService,
    check_health,
    parse_feature,
    should_query,
)

FEATURES = [
    {
        "id": "address.1",
        "place_type": ["address"],
        "relevance": 0.62,
        "place_name": "12 Marine Crescent, Goring-by-Sea BN12 4QA",
        "center": [-0.4301, 50.8112],
        "context": [{"id": "postcode.9", "text": "BN12 4QA"}],
    },
    {
        "id": "address.2",
        "place_type": ["address"],
        "relevance": 0.97,
        "place_name": "12 Marine Parade, Worthing BN11 3PN",
        "center": [-0.3681, 50.8107],
        "context": [{"id": "postcode.7", "text": "BN11 3PN"}],
    },
    {"id": "broken", "relevance": 0.99, "place_name": "No centre"},
]


def _client(handler, **overrides) -> GeocodingClient:
    options = {
        "base_url": "https://geo.test/places",
        "access_token": "test-token",
        "backoff_seconds": 0,
        "transport": httpx.MockTransport(handler),
    }
    options.update(overrides)
    return GeocodingClient(**options)


class StubClient:
    def __init__(self, candidates=None, error=None) -> None:
        self.candidates = candidates or []
        self.error = error
        self.queries = []

    def forward(self, query, *, autocomplete=True):
        self.queries.append((query, autocomplete))
        if self.error is not None:
            raise self.error
        return self.candidates


def _candidate(relevance: float) -> PlaceCandidate:
    return PlaceCandidate(
        place_id="address.2",
        display_name="12 Marine Parade, Worthing BN11 3PN",
        relevance=relevance,
        latitude=50.8107,
        longitude=-0.3681,
        postcode="BN11 3PN",
    )


def test_forward_builds_request_and_sorts_by_relevance():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"features": FEATURES})

    candidates = _client(handler).forward("12 Marine Parade")

    assert [candidate.place_id for candidate in candidates] == ["address.2", "address.1"]
    assert candidates[0].latitude == 50.8107
    assert candidates[0].longitude == -0.3681
    assert candidates[0].postcode == "BN11 3PN"

    request = seen[0]
    assert request.url.path == "/places/12 Marine Parade.json"
    assert request.url.params["access_token"] == "test-token"
    assert request.url.params["country"] == "gb"
    assert request.url.params["autocomplete"] == "true"


def test_forward_retries_server_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={"features": FEATURES[:1]})

    candidates = _client(handler, max_retries=2).forward("BN12")

    assert len(calls) == 3
    assert [candidate.place_id for candidate in candidates] == ["address.1"]


def test_forward_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(502)

    with pytest.raises(UpstreamError):
        _client(handler, max_retries=1).forward("Worthing")

    assert len(calls) == 2


def test_forward_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(401, json={"message": "Not Authorized - Invalid Token"})

    with pytest.raises(UpstreamError, match="401"):
        _client(handler).forward("Worthing")

    assert len(calls) == 1


def test_forward_rejects_payload_without_features():
    with pytest.raises(UpstreamError):
        _client(lambda request: httpx.Response(200, json={"type": "FeatureCollection"})).forward("Worthing")


def test_network_failure_becomes_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError, match="not reachable"):
        _client(handler, max_retries=0).forward("Worthing")


def test_client_requires_access_token(monkeypatch):
    monkeypatch.setattr(settings, "geocoder_access_token", None)

    with pytest.raises(ValueError):
        GeocodingClient()


def test_parse_feature_reads_postcode_feature_and_geometry():
    candidate = parse_feature(
        {
            "id": "postcode.1",
            "place_type": ["postcode"],
            "text": "BN11 3PN",
            "geometry": {"type": "Point", "coordinates": [-0.37, 50.81]},
        }
    )

    assert candidate.postcode == "BN11 3PN"
    assert candidate.display_name == "BN11 3PN"
    assert (candidate.latitude, candidate.longitude) == (50.81, -0.37)
    assert candidate.relevance == 0.0


def test_check_health_reports_failures():
    assert check_health(_client(lambda request: httpx.Response(200, json={"features": []}))) is True
    assert check_health(_client(lambda request: httpx.Response(403), max_retries=0)) is False


@pytest.mark.parametrize(
    ("query", "expected"),
    [("", False), ("   ", False), ("a", False), ("N", False), ("N1", True), ("bn11", True), ("12 Marine", True)],
)
def test_should_query(query, expected):
    assert should_query(query) is expected


def test_suggest_skips_short_queries():
    client = StubClient([_candidate(0.9)])

    assert GeocodingService(client).suggest("a") == []
    assert client.queries == []


def test_suggest_returns_candidates_with_autocomplete():
    client = StubClient([_candidate(0.9)])

    assert GeocodingService(client).suggest("12 Marine") == [_candidate(0.9)]
    assert client.queries == [("12 Marine", True)]


def test_suggest_degrades_to_empty_on_upstream_failure():
    service = GeocodingService(StubClient(error=UpstreamError("boom")))

    assert service.suggest("Worthing") == []


def test_verify_accepts_confident_match():
    result = GeocodingService(StubClient([_candidate(0.8)]), confidence_threshold=0.8).verify("12 marine parade")

    assert result.verified is True
    assert result.address == "12 Marine Parade, Worthing BN11 3PN"
    assert (result.latitude, result.longitude) == (50.8107, -0.3681)
    assert result.message.startswith("Address verified")


def test_verify_rejects_low_confidence():
    result = GeocodingService(StubClient([_candidate(0.79)]), confidence_threshold=0.8).verify("12 marine")

    assert result.verified is False
    assert result.latitude is None
    assert result.relevance == 0.79


def test_verify_without_results():
    result = GeocodingService(StubClient([])).verify("Nowhere Lane")

    assert result.verified is False
    assert result.message == "No matching address found"


def test_verify_degrades_on_upstream_failure():
    result = GeocodingService(StubClient(error=UpstreamError("timeout"))).verify("12 Marine Parade")

    assert result.verified is False
    assert "unavailable" in result.message


def test_unconfigured_service_degrades(monkeypatch):
    monkeypatch.setattr(settings, "geocoder_access_token", None)
    service = GeocodingService()

    assert service.configured is False
    assert service.suggest("Worthing") == []
    assert service.verify("12 Marine Parade").verified is False
