"""Redis key naming conventions for the route-elevation cache layer."""
from __future__ import annotations

import hashlib

_PREFIX = "re"


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()[:16]


def directions(start: str, end: str, mode: str) -> str:
    """start/end are ``lat,lng`` strings."""
    return f"{_PREFIX}:directions:{mode.lower()}:{_digest(f'{start}|{end}')}"


def elevation(encoded_locations: str) -> str:
    """Key for one elevation batch, by its encoded polyline."""
    return f"{_PREFIX}:elevation:{_digest(encoded_locations)}"


def geocode(query: str) -> str:
    return f"{_PREFIX}:geocode:{_digest(query.strip().lower())}"


def reverse_geocode(lat: float, lng: float) -> str:
    return f"{_PREFIX}:reverse:{lat:.5f},{lng:.5f}"
