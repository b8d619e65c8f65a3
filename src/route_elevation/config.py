"""Centralized settings for the route-elevation service."""
from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "ROUTE_ELEVATION_"}

    # Google Maps Platform; empty key means the google provider is unavailable
    google_maps_api_key: str = ""
    maps_base_url: str = "https://maps.googleapis.com/maps/api"

    # Provider used when a request doesn't name one
    default_provider: str = "google"

    # Maximum points for elevation sampling
    elevation_sample_points: int = 100
    # Elevation API accepts at most 512 locations per request
    elevation_batch_size: int = 512

    # Initial map view handed to front ends
    default_center_lat: float = 37.7749   # San Francisco
    default_center_lng: float = -122.4194
    default_zoom: int = 12

    # Outbound HTTP
    http_timeout_s: int = 20
    http_tries: int = 4
    http_backoff_s: float = 0.8
    user_agent: str = "RouteElevation/0.1.0"

    # Redis; empty string means disabled
    redis_url: str = ""

    # TTL values in seconds for each cached data type
    ttl_directions: int = 3600        # 1 h
    ttl_elevation: int = 2592000      # 30 d
    ttl_geocode: int = 86400          # 24 h


settings = Settings()
