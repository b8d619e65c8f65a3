"""Route geometry: path sampling and cumulative-distance route points."""
from __future__ import annotations

from math import atan2, cos, floor, radians, sin, sqrt
from typing import List, Sequence

from route_elevation.core.models import ElevationSample, LatLng, RoutePoint


EARTH_RADIUS_M = 6_371_000.0


# ---------------------------------------------------------------------------
# Geo helpers
# ---------------------------------------------------------------------------

def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in metres between two WGS-84 points."""
    lat1r, lng1r, lat2r, lng2r = map(radians, [lat1, lng1, lat2, lng2])
    dlat = lat2r - lat1r
    dlng = lng2r - lng1r
    a = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlng / 2) ** 2
    return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_between(a: LatLng, b: LatLng) -> float:
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def round_half_up(x: float) -> int:
    # round() is half-to-even (2.5 -> 2); this is half-up (2.5 -> 3)
    return int(floor(x + 0.5))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sample_path(path: Sequence[LatLng], max_count: int) -> Sequence[LatLng]:
    """
    Pick at most ``max_count`` evenly spaced coordinates from ``path``.

    Short paths are returned as-is. Longer ones are sampled by index, so the
    first and last coordinates are always kept; rounding can select the same
    index twice and such repeats are kept rather than dropped.
    """
    if len(path) <= max_count:
        return path
    if max_count <= 0:
        return []
    if max_count == 1:
        return [path[0]]

    interval = (len(path) - 1) / (max_count - 1)
    return [path[round_half_up(i * interval)] for i in range(max_count)]


def build_route_points(samples: Sequence[ElevationSample]) -> List[RoutePoint]:
    """
    Turn elevation results (in path order) into route points.

    ``distance`` on each point is the running sum of great-circle distances
    between consecutive sample locations, starting at 0 for the first one.
    """
    points: List[RoutePoint] = []
    total = 0.0

    for i, s in enumerate(samples):
        if i > 0:
            total += distance_between(samples[i - 1].location, s.location)
        points.append(
            RoutePoint(
                lat=s.location.lat,
                lng=s.location.lng,
                elevation=s.elevation,
                distance=total,
            )
        )

    return points
