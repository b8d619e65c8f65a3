from __future__ import annotations

import math
from typing import Dict, List, Tuple, Union

from route_elevation.core.models import ElevationSample, LatLng, LocationData, parse_lat_lng
from route_elevation.errors import ProviderError
from route_elevation.providers.base import MappingProvider


# A few fixed places so text lookups work offline
GAZETTEER: Dict[str, Tuple[str, float, float]] = {
    "golden gate park": ("Golden Gate Park, San Francisco, CA, USA", 37.7694, -122.4862),
    "twin peaks": ("Twin Peaks, San Francisco, CA 94131, USA", 37.7544, -122.4477),
    "ferry building": ("Ferry Building, San Francisco, CA 94111, USA", 37.7955, -122.3937),
    "mount tamalpais": ("Mt Tamalpais, California 94941, USA", 37.9235, -122.5965),
    "coit tower": ("Coit Tower, San Francisco, CA 94133, USA", 37.8024, -122.4058),
}


class MockProvider(MappingProvider):
    """
    Deterministic fake data so the pipeline runs end-to-end without APIs.
    Routes are straight lines; terrain is a pair of sine waves over lat/lng.
    """

    name = "mock"

    def __init__(self, path_points: int = 250):
        self.path_points = max(2, path_points)

    def get_route(self, start: LatLng, end: LatLng, mode: str) -> List[LatLng]:
        n = self.path_points
        return [
            LatLng(
                lat=start.lat + (end.lat - start.lat) * i / (n - 1),
                lng=start.lng + (end.lng - start.lng) * i / (n - 1),
            )
            for i in range(n)
        ]

    @staticmethod
    def terrain(lat: float, lng: float) -> float:
        return 120.0 + 60.0 * math.sin(lat * 150.0) + 25.0 * math.cos(lng * 310.0)

    def get_elevations(self, coordinates: List[LatLng]) -> List[ElevationSample]:
        return [
            ElevationSample(location=c, elevation=round(self.terrain(c.lat, c.lng), 2), resolution=9.5)
            for c in coordinates
        ]

    def resolve_address(self, query: Union[str, LatLng]) -> LocationData:
        if isinstance(query, LatLng):
            return LocationData(address=f"{query.lat:.5f}, {query.lng:.5f}", lat=query.lat, lng=query.lng)

        text = (query or "").strip()
        coord = parse_lat_lng(text)
        if coord is not None:
            return self.resolve_address(coord)

        hit = GAZETTEER.get(text.lower())
        if hit is None:
            raise ProviderError("Geocoding request failed: ZERO_RESULTS", status="ZERO_RESULTS")
        address, lat, lng = hit
        return LocationData(address=address, lat=lat, lng=lng)
