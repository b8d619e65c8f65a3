from __future__ import annotations

from typing import Sequence

from route_elevation.core.models import RoutePoint, RouteStats


def aggregate_route_stats(points: Sequence[RoutePoint]) -> RouteStats:
    """
    Summarise a route profile in a single left-to-right pass.

    Gain/loss are the sums of positive/negative elevation steps between
    consecutive points. Grade is ``elevation change / distance change * 100``
    per step; steps that don't advance in distance contribute no grade.
    ``total_distance`` is read from the last point, not re-summed.
    No smoothing is applied, so noisy elevation data inflates gain and loss.
    """
    if not points:
        return RouteStats()

    gain = 0.0
    loss = 0.0
    max_elev = points[0].elevation
    min_elev = points[0].elevation
    max_grade = 0.0
    min_grade = 0.0

    for previous, current in zip(points, points[1:]):
        max_elev = max(max_elev, current.elevation)
        min_elev = min(min_elev, current.elevation)

        elev_change = current.elevation - previous.elevation
        if elev_change > 0:
            gain += elev_change
        else:
            loss += abs(elev_change)

        dist_change = current.distance - previous.distance
        if dist_change > 0:
            grade = (elev_change / dist_change) * 100
            max_grade = max(max_grade, grade)
            min_grade = min(min_grade, grade)

    return RouteStats(
        total_distance=points[-1].distance,
        total_elevation_gain=gain,
        total_elevation_loss=loss,
        max_elevation=max_elev,
        min_elevation=min_elev,
        max_grade=max_grade,
        min_grade=min_grade,
    )
