from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Union

from route_elevation.core.models import ElevationSample, LatLng, LocationData


class MappingProvider(ABC):
    """Directions, elevation and geocoding from an external mapping service."""

    name: str = "base"

    @abstractmethod
    def get_route(self, start: LatLng, end: LatLng, mode: str) -> List[LatLng]:
        """Ordered path of coordinates from ``start`` to ``end`` for a travel mode."""
        raise NotImplementedError

    @abstractmethod
    def get_elevations(self, coordinates: List[LatLng]) -> List[ElevationSample]:
        """Elevation at each coordinate, in the same order."""
        raise NotImplementedError

    @abstractmethod
    def resolve_address(self, query: Union[str, LatLng]) -> LocationData:
        """Forward-geocode free text, or reverse-geocode a coordinate."""
        raise NotImplementedError
