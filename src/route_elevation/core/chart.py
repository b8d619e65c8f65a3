"""Elevation profile series for charts."""
from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel

from route_elevation.core.formatting import format_distance, format_elevation
from route_elevation.core.models import RoutePoint


SPARK_LEVELS = "▁▂▃▄▅▆▇█"


class ElevationChart(BaseModel):
    labels: List[str]
    elevations: List[float]
    points: List[RoutePoint]

    @property
    def is_empty(self) -> bool:
        return not self.points

    def point_at(self, index: Optional[int]) -> Optional[RoutePoint]:
        """Route point under the chart cursor, for highlighting it on a map."""
        if index is None or index < 0 or index >= len(self.points):
            return None
        return self.points[index]

    def tooltip(self, index: int) -> Optional[List[str]]:
        p = self.point_at(index)
        if p is None:
            return None
        return [
            f"Distance: {format_distance(p.distance, compact=True)}",
            f"Elevation: {format_elevation(p.elevation, compact=True)}",
        ]


def elevation_chart(points: Sequence[RoutePoint]) -> ElevationChart:
    return ElevationChart(
        labels=[format_distance(p.distance, compact=True) for p in points],
        elevations=[p.elevation for p in points],
        points=list(points),
    )


def _resample_to_width(values: List[float], width: int) -> List[float]:
    if len(values) <= width:
        return values
    # Downsample by taking evenly spaced values
    indices = [int(i * len(values) / width) for i in range(width)]
    return [values[i] for i in indices]


def render_sparkline(points: Sequence[RoutePoint], width: int = 60) -> str:
    """One-line block-character elevation profile for terminals."""
    if not points or width <= 0:
        return ""

    values = _resample_to_width([p.elevation for p in points], width)
    lo = min(values)
    span = max(values) - lo
    if span == 0:
        span = 1

    top = len(SPARK_LEVELS) - 1
    return "".join(SPARK_LEVELS[int((v - lo) / span * top)] for v in values)
