from __future__ import annotations

import logging
from typing import Optional, Union

from route_elevation.config import settings
from route_elevation.core.models import LatLng, LocationData, RouteData, parse_travel_mode
from route_elevation.core.route import build_route_points, sample_path
from route_elevation.core.stats import aggregate_route_stats
from route_elevation.errors import RouteCalculationError
from route_elevation.providers.base import MappingProvider

log = logging.getLogger(__name__)

Endpoint = Union[LocationData, LatLng]


def _coordinate(p: Endpoint) -> LatLng:
    if isinstance(p, LocationData):
        return p.coordinate()
    return p


def _location(p: Endpoint) -> LocationData:
    if isinstance(p, LocationData):
        return p
    return LocationData(address=p.as_param(), lat=p.lat, lng=p.lng)


def calculate_route(
    start: Endpoint,
    end: Endpoint,
    travel_mode: str,
    provider: MappingProvider,
    sample_points: Optional[int] = None,
) -> RouteData:
    """
    Directions -> sampled path -> elevations -> route points -> stats.

    Any failure along the way (provider status, network, malformed payload)
    is raised as RouteCalculationError so callers never see partial results.
    """
    mode = parse_travel_mode(travel_mode)
    max_count = sample_points if sample_points is not None else settings.elevation_sample_points

    try:
        path = provider.get_route(_coordinate(start), _coordinate(end), mode)
        sampled = sample_path(path, max_count)
        samples = provider.get_elevations(list(sampled))
        points = build_route_points(samples)
        stats = aggregate_route_stats(points)
    except Exception as e:
        log.warning("Route calculation error (%s): %s: %s", provider.name, type(e).__name__, e)
        raise RouteCalculationError() from e

    log.debug(
        "Route %s: %d path points, %d samples, %.0f m",
        mode, len(path), len(points), stats.total_distance,
    )
    return RouteData(
        points=points,
        stats=stats,
        start=_location(start),
        end=_location(end),
        travel_mode=mode,
    )
