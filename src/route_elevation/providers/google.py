from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import polyline
import requests

from route_elevation.cache import keys
from route_elevation.cache.redis_client import cache_get_json, cache_set_json
from route_elevation.config import settings
from route_elevation.core.models import ElevationSample, LatLng, LocationData
from route_elevation.errors import ConfigurationError, ProviderError
from route_elevation.providers.base import MappingProvider
from route_elevation.providers.http import HTTPClient

log = logging.getLogger(__name__)


class GoogleMapsProvider(MappingProvider):
    """
    Google Maps Platform web services:

      - Directions API  -> routes[0].overview_polyline (decoded to a path)
      - Elevation API   -> one result per location, queried as enc:<polyline>
      - Geocoding API   -> address search and reverse lookup of map clicks

    Responses are cached per instance and, when configured, in Redis.
    """

    name = "google"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        http: Optional[HTTPClient] = None,
        batch_size: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        if not self.api_key:
            raise ConfigurationError(
                "Google Maps API key missing: set ROUTE_ELEVATION_GOOGLE_MAPS_API_KEY"
            )
        self.base_url = (base_url or settings.maps_base_url).rstrip("/")
        self.http = http or HTTPClient(
            user_agent=settings.user_agent,
            timeout_s=settings.http_timeout_s,
            tries=settings.http_tries,
            backoff_s=settings.http_backoff_s,
        )
        self.batch_size = batch_size or settings.elevation_batch_size

        self._route_cache: Dict[str, List[LatLng]] = {}
        self._elevation_cache: Dict[str, List[ElevationSample]] = {}
        self._geocode_cache: Dict[str, LocationData] = {}

    # ---------- transport ----------

    def _call(self, service: str, params: Dict[str, Any], what: str) -> Dict[str, Any]:
        url = f"{self.base_url}/{service}/json"
        try:
            data = self.http.get_json(url, params={**params, "key": self.api_key})
        except (requests.RequestException, ValueError) as e:
            raise ProviderError(f"{what} request failed: {type(e).__name__}: {e}") from e

        if not isinstance(data, dict):
            raise ProviderError(f"{what} response malformed: expected a JSON object")

        status = data.get("status", "UNKNOWN_ERROR")
        if status != "OK":
            msg = data.get("error_message")
            log.debug("%s returned %s (%s)", service, status, msg)
            raise ProviderError(f"{what} request failed: {status}", status=status)
        return data

    # ---------- directions ----------

    def get_route(self, start: LatLng, end: LatLng, mode: str) -> List[LatLng]:
        key = keys.directions(start.as_param(), end.as_param(), mode)
        if key in self._route_cache:
            return self._route_cache[key]

        cached = cache_get_json(key)
        if cached is not None:
            path = [LatLng(lat=lat, lng=lng) for lat, lng in cached]
            self._route_cache[key] = path
            return path

        data = self._call(
            "directions",
            {
                "origin": start.as_param(),
                "destination": end.as_param(),
                "mode": mode.lower(),
            },
            "Directions",
        )
        routes = data.get("routes") or []
        if not routes:
            raise ProviderError("Directions request failed: ZERO_RESULTS", status="ZERO_RESULTS")

        try:
            encoded = routes[0]["overview_polyline"]["points"]
            coords = polyline.decode(encoded)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Directions response malformed: {e}") from e

        path = [LatLng(lat=lat, lng=lng) for lat, lng in coords]
        self._route_cache[key] = path
        cache_set_json(key, coords, settings.ttl_directions)
        return path

    # ---------- elevation ----------

    def _elevation_batch(self, chunk: List[LatLng]) -> List[ElevationSample]:
        encoded = polyline.encode([(c.lat, c.lng) for c in chunk])
        key = keys.elevation(encoded)
        if key in self._elevation_cache:
            return self._elevation_cache[key]

        results = cache_get_json(key)
        fetched = results is None
        if fetched:
            data = self._call("elevation", {"locations": f"enc:{encoded}"}, "Elevation")
            results = data.get("results") or []

        if len(results) != len(chunk):
            raise ProviderError(
                f"Elevation response length mismatch: {len(results)} results for {len(chunk)} locations"
            )

        try:
            samples = [
                ElevationSample(
                    location=LatLng(lat=r["location"]["lat"], lng=r["location"]["lng"]),
                    elevation=r["elevation"],
                    resolution=r.get("resolution"),
                )
                for r in results
            ]
        except (KeyError, TypeError) as e:
            raise ProviderError(f"Elevation response malformed: {e}") from e

        self._elevation_cache[key] = samples
        if fetched:
            cache_set_json(key, results, settings.ttl_elevation)
        return samples

    def get_elevations(self, coordinates: List[LatLng]) -> List[ElevationSample]:
        out: List[ElevationSample] = []
        for i in range(0, len(coordinates), self.batch_size):
            out.extend(self._elevation_batch(list(coordinates[i : i + self.batch_size])))
        return out

    # ---------- geocoding ----------

    def resolve_address(self, query: Union[str, LatLng]) -> LocationData:
        if isinstance(query, LatLng):
            return self._reverse_geocode(query)

        text = (query or "").strip()
        if not text:
            raise ProviderError("Geocoding request failed: INVALID_REQUEST", status="INVALID_REQUEST")

        key = keys.geocode(text)
        if key in self._geocode_cache:
            return self._geocode_cache[key]

        cached = cache_get_json(key)
        if cached is not None:
            loc = LocationData(**cached)
        else:
            data = self._call("geocode", {"address": text}, "Geocoding")
            try:
                first = data["results"][0]
                geo = first["geometry"]["location"]
                loc = LocationData(address=first["formatted_address"], lat=geo["lat"], lng=geo["lng"])
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise ProviderError(f"Geocoding response malformed: {e}") from e
            cache_set_json(key, loc.model_dump(), settings.ttl_geocode)

        self._geocode_cache[key] = loc
        return loc

    def _reverse_geocode(self, coord: LatLng) -> LocationData:
        key = keys.reverse_geocode(coord.lat, coord.lng)
        if key in self._geocode_cache:
            return self._geocode_cache[key]

        address = cache_get_json(key)
        if address is None:
            data = self._call("geocode", {"latlng": coord.as_param()}, "Geocoding")
            try:
                address = data["results"][0]["formatted_address"]
            except (KeyError, IndexError, TypeError) as e:
                raise ProviderError(f"Geocoding response malformed: {e}") from e
            cache_set_json(key, address, settings.ttl_geocode)

        # Keep the clicked coordinate; the geocoder snaps to the nearest address
        loc = LocationData(address=address, lat=coord.lat, lng=coord.lng)
        self._geocode_cache[key] = loc
        return loc
