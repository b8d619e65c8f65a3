"""FastAPI REST backend for route elevation profiles."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from route_elevation.cache.redis_client import redis_ok
from route_elevation.config import settings
from route_elevation.core.chart import elevation_chart
from route_elevation.core.engine import calculate_route
from route_elevation.core.formatting import summarize_stats
from route_elevation.core.models import (
    TRAVEL_MODE_LABELS,
    LatLng,
    LocationData,
    RouteData,
    RoutePoint,
    RouteStats,
    parse_travel_mode,
)
from route_elevation.core.stats import aggregate_route_stats
from route_elevation.errors import ConfigurationError, ProviderError, RouteCalculationError
from route_elevation.providers.base import MappingProvider
from route_elevation.providers.factory import build_provider

log = logging.getLogger(__name__)

app = FastAPI(title="Route Elevation", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Module-level provider singletons (L1 caches persist across requests)
# ---------------------------------------------------------------------------
_provider_cache: Dict[str, MappingProvider] = {}


def _get_provider(name: Optional[str]) -> MappingProvider:
    key = (name or settings.default_provider).strip().lower()
    if key not in _provider_cache:
        try:
            _provider_cache[key] = build_provider(key)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ConfigurationError as e:
            raise HTTPException(status_code=503, detail=str(e))
    return _provider_cache[key]


def _geocode_error(e: ProviderError) -> HTTPException:
    if e.status == "ZERO_RESULTS":
        return HTTPException(status_code=404, detail="No matching location found")
    if e.status == "INVALID_REQUEST":
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class RouteRequest(BaseModel):
    start: Union[LocationData, LatLng]
    end: Union[LocationData, LatLng]
    travel_mode: str = "WALKING"
    provider: Optional[str] = None
    sample_points: Optional[int] = Field(default=None, ge=2, le=512)

    @field_validator("travel_mode")
    @classmethod
    def _mode(cls, v: str) -> str:
        return parse_travel_mode(v)


class PointsRequest(BaseModel):
    points: List[RoutePoint]


class StatItem(BaseModel):
    label: str
    value: str


class StatsSummary(BaseModel):
    stats: RouteStats
    items: List[StatItem]


class ChartOut(BaseModel):
    labels: List[str]
    elevations: List[float]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok", "redis": redis_ok(), "provider": settings.default_provider}


@app.get("/config")
def client_config() -> Dict[str, Any]:
    return {
        "default_center": {"lat": settings.default_center_lat, "lng": settings.default_center_lng},
        "default_zoom": settings.default_zoom,
        "elevation_sample_points": settings.elevation_sample_points,
        "travel_modes": [{"value": k, "label": v} for k, v in TRAVEL_MODE_LABELS.items()],
    }


@app.post("/route", response_model=RouteData)
def route(req: RouteRequest):
    provider = _get_provider(req.provider)
    try:
        return calculate_route(
            req.start,
            req.end,
            req.travel_mode,
            provider,
            sample_points=req.sample_points,
        )
    except RouteCalculationError as e:
        raise HTTPException(status_code=502, detail=str(e))


@app.post("/stats", response_model=RouteStats)
def stats(req: PointsRequest):
    return aggregate_route_stats(req.points)


@app.post("/stats/summary", response_model=StatsSummary)
def stats_summary(req: PointsRequest):
    s = aggregate_route_stats(req.points)
    items = [StatItem(label=label, value=value) for label, value in summarize_stats(s)]
    return StatsSummary(stats=s, items=items)


@app.post("/chart", response_model=ChartOut)
def chart(req: PointsRequest):
    c = elevation_chart(req.points)
    return ChartOut(labels=c.labels, elevations=c.elevations)


@app.get("/geocode", response_model=LocationData)
def geocode(q: str = Query(..., min_length=1), provider: Optional[str] = None):
    p = _get_provider(provider)
    try:
        return p.resolve_address(q)
    except ProviderError as e:
        raise _geocode_error(e)


@app.get("/reverse-geocode", response_model=LocationData)
def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    provider: Optional[str] = None,
):
    p = _get_provider(provider)
    try:
        return p.resolve_address(LatLng(lat=lat, lng=lng))
    except ProviderError as e:
        raise _geocode_error(e)
