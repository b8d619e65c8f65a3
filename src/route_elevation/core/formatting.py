"""Display strings for route statistics."""
from __future__ import annotations

from typing import List, Optional, Tuple

from route_elevation.core.models import RouteStats
from route_elevation.core.route import round_half_up


def format_distance(distance_m: float, compact: bool = False) -> str:
    """``850 m`` below a kilometre, ``1.2 km`` above; ``compact`` drops the space."""
    sep = "" if compact else " "
    if distance_m < 1000:
        return f"{round_half_up(distance_m)}{sep}m"
    return f"{distance_m / 1000:.1f}{sep}km"


def format_elevation(elevation_m: float, compact: bool = False) -> str:
    sep = "" if compact else " "
    return f"{round_half_up(elevation_m)}{sep}m"


def format_grade(grade: float) -> str:
    return f"{grade:.1f}%"


def summarize_stats(stats: Optional[RouteStats]) -> List[Tuple[str, str]]:
    """
    Ordered ``(label, value)`` pairs for display.

    ``None`` means no route is available and yields an empty list. Min
    elevation and min grade are only listed once the route has some length.
    """
    if stats is None:
        return []

    rows = [
        ("Total Distance", format_distance(stats.total_distance)),
        ("Elevation Gain", format_elevation(stats.total_elevation_gain)),
        ("Elevation Loss", format_elevation(stats.total_elevation_loss)),
        ("Max Elevation", format_elevation(stats.max_elevation)),
        ("Max Grade", format_grade(stats.max_grade)),
    ]
    if stats.total_distance > 0:
        rows.append(("Min Elevation", format_elevation(stats.min_elevation)))
        rows.append(("Min Grade", format_grade(stats.min_grade)))
    return rows
