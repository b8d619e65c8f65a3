"""Route selection state: endpoints, travel mode and the current route."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from route_elevation.core.engine import calculate_route
from route_elevation.core.models import LatLng, LocationData, RouteData, RouteStats, parse_travel_mode
from route_elevation.errors import ProviderError, RouteCalculationError
from route_elevation.providers.base import MappingProvider

log = logging.getLogger(__name__)

Slot = Literal["start", "end"]


@dataclass
class RouteSession:
    """
    Explicit state transitions for one user's route.

    Every change of start, end or travel mode recalculates the route when
    ``auto_recalculate`` is set. A failed calculation clears ``route_data``
    (and therefore ``stats``) so the previous route's numbers never linger.
    """

    provider: MappingProvider
    travel_mode: str = "WALKING"
    sample_points: Optional[int] = None
    auto_recalculate: bool = True

    start: Optional[LocationData] = None
    end: Optional[LocationData] = None
    route_data: Optional[RouteData] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        self.travel_mode = parse_travel_mode(self.travel_mode)

    @property
    def stats(self) -> Optional[RouteStats]:
        return self.route_data.stats if self.route_data is not None else None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    # ---- transitions ----

    def set_location(self, location: Optional[LocationData], slot: Slot) -> None:
        if slot == "start":
            self.start = location
        elif slot == "end":
            self.end = location
        else:
            raise ValueError(f"Unknown slot: '{slot}' (expected 'start' or 'end')")
        self._changed()

    def set_start(self, location: Optional[LocationData]) -> None:
        self.set_location(location, "start")

    def set_end(self, location: Optional[LocationData]) -> None:
        self.set_location(location, "end")

    def set_travel_mode(self, mode: str) -> None:
        self.travel_mode = parse_travel_mode(mode)
        self._changed()

    def next_click_slot(self) -> Slot:
        # Both set: a new click replaces the start
        if self.start is None:
            return "start"
        if self.end is None:
            return "end"
        return "start"

    def handle_map_click(self, coord: LatLng) -> Optional[Slot]:
        """Reverse-geocode a clicked point and place it; returns the slot used.

        A click the geocoder can't resolve is ignored and leaves state untouched.
        """
        try:
            location = self.provider.resolve_address(coord)
        except ProviderError as e:
            log.info("Ignoring map click at %s: %s", coord.as_param(), e)
            return None

        slot = self.next_click_slot()
        self.set_location(location, slot)
        return slot

    def clear(self) -> None:
        self.start = None
        self.end = None
        self.route_data = None
        self.error = None

    def recalculate(self) -> Optional[RouteData]:
        self.error = None
        if not self.is_complete:
            self.route_data = None
            return None

        try:
            self.route_data = calculate_route(
                self.start,
                self.end,
                self.travel_mode,
                self.provider,
                sample_points=self.sample_points,
            )
        except RouteCalculationError as e:
            self.route_data = None
            self.error = str(e)
        return self.route_data

    def _changed(self) -> None:
        if self.auto_recalculate:
            self.recalculate()
