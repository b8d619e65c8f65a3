from __future__ import annotations

import re
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


TravelMode = Literal["WALKING", "BICYCLING", "DRIVING"]

TRAVEL_MODES: List[str] = ["WALKING", "BICYCLING", "DRIVING"]

TRAVEL_MODE_LABELS: Dict[str, str] = {
    "WALKING": "Walking",
    "BICYCLING": "Cycling",
    "DRIVING": "Driving",
}


def parse_travel_mode(value: str) -> str:
    """Accept ``walking`` / ``Walking`` / ``WALKING`` and return the canonical form."""
    mode = (value or "").strip().upper()
    if mode not in TRAVEL_MODES:
        raise ValueError(f"Unknown travel mode: '{value}' (supported: {', '.join(m.lower() for m in TRAVEL_MODES)})")
    return mode


class LatLng(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def as_param(self) -> str:
        """``lat,lng`` as the mapping web services expect it."""
        return f"{self.lat},{self.lng}"


_COORD_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_lat_lng(text: str) -> Optional[LatLng]:
    """``"37.77,-122.41"`` -> LatLng; anything else (or out of range) -> None."""
    m = _COORD_RE.match(text or "")
    if not m:
        return None
    lat, lng = float(m.group(1)), float(m.group(2))
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return LatLng(lat=lat, lng=lng)


class LocationData(BaseModel):
    address: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def coordinate(self) -> LatLng:
        return LatLng(lat=self.lat, lng=self.lng)


class ElevationSample(BaseModel):
    """One elevation provider result, in request order."""
    location: LatLng
    elevation: float
    resolution: Optional[float] = None


class RoutePoint(BaseModel):
    lat: float
    lng: float
    elevation: float  # metres
    distance: float   # metres, cumulative from route start


class RouteStats(BaseModel):
    total_distance: float = 0.0
    total_elevation_gain: float = 0.0
    total_elevation_loss: float = 0.0
    max_elevation: float = 0.0
    min_elevation: float = 0.0
    max_grade: float = 0.0
    min_grade: float = 0.0


class RouteData(BaseModel):
    points: List[RoutePoint]
    stats: RouteStats
    start: Optional[LocationData] = None
    end: Optional[LocationData] = None
    travel_mode: TravelMode = "WALKING"
