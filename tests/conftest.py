from __future__ import annotations

from typing import Any, Dict, List, Optional

import polyline
import pytest
from fastapi.testclient import TestClient

from route_elevation import api
from route_elevation.core.models import RoutePoint
from route_elevation.errors import ProviderError
from route_elevation.providers.mock import MockProvider


def make_points(profile: List[tuple]) -> List[RoutePoint]:
    """[(distance, elevation), ...] -> route points along the equator."""
    return [
        RoutePoint(lat=0.0, lng=d / 111_195.0, elevation=e, distance=d)
        for d, e in profile
    ]


class BrokenProvider(MockProvider):
    """Mock provider whose chosen stage fails like an unavailable service."""

    name = "broken"

    def __init__(self, fail_on: str = "elevation"):
        super().__init__(path_points=50)
        self.fail_on = fail_on

    def get_route(self, start, end, mode):
        if self.fail_on == "route":
            raise ProviderError("Directions request failed: ZERO_RESULTS", status="ZERO_RESULTS")
        return super().get_route(start, end, mode)

    def get_elevations(self, coordinates):
        if self.fail_on == "elevation":
            raise ProviderError("Elevation request failed: UNKNOWN_ERROR", status="UNKNOWN_ERROR")
        return super().get_elevations(coordinates)

    def resolve_address(self, query):
        if self.fail_on == "geocode":
            raise ProviderError("Geocoding request failed: ZERO_RESULTS", status="ZERO_RESULTS")
        return super().resolve_address(query)


class FakeHTTP:
    """Stands in for HTTPClient; answers Google web-service URLs from canned payloads."""

    def __init__(self, directions: Optional[dict] = None, geocode: Optional[dict] = None, elevation_status: str = "OK"):
        self.directions = directions
        self.geocode = geocode
        self.elevation_status = elevation_status
        self.calls: List[tuple] = []

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None, timeout_s: Optional[int] = None):
        params = params or {}
        self.calls.append((url, dict(params)))
        if url.endswith("/directions/json"):
            return self.directions
        if url.endswith("/geocode/json"):
            return self.geocode
        if url.endswith("/elevation/json"):
            if self.elevation_status != "OK":
                return {"status": self.elevation_status, "results": []}
            coords = polyline.decode(params["locations"][len("enc:"):])
            return {
                "status": "OK",
                "results": [
                    {"location": {"lat": lat, "lng": lng}, "elevation": 100.0 + i, "resolution": 4.8}
                    for i, (lat, lng) in enumerate(coords)
                ],
            }
        raise AssertionError(f"unexpected URL {url}")


@pytest.fixture
def mock_provider():
    return MockProvider(path_points=250)


@pytest.fixture
def example_points():
    return make_points([(0, 10), (100, 15), (200, 5), (300, 20)])


@pytest.fixture
def client():
    api._provider_cache.clear()
    with TestClient(api.app) as c:
        yield c
    api._provider_cache.clear()
