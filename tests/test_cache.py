from __future__ import annotations

import json

import polyline
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from conftest import FakeHTTP
from route_elevation.cache import keys, redis_client
from route_elevation.core.models import LatLng
from route_elevation.providers.google import GoogleMapsProvider


class FakeRedis:
    def __init__(self, broken: bool = False):
        self.store = {}
        self.broken = broken

    def ping(self):
        if self.broken:
            raise RedisConnectionError("gone")
        return True

    def get(self, key):
        if self.broken:
            raise RedisConnectionError("gone")
        return self.store.get(key)

    def set(self, key, value, ex=None):
        if self.broken:
            raise RedisConnectionError("gone")
        self.store[key] = value


@pytest.fixture
def fake_redis(monkeypatch):
    r = FakeRedis()
    monkeypatch.setattr(redis_client, "_client", r)
    monkeypatch.setattr(redis_client, "_resolved", True)
    return r


def test_disabled_cache_is_a_miss(monkeypatch):
    monkeypatch.setattr(redis_client, "_client", None)
    monkeypatch.setattr(redis_client, "_resolved", True)
    assert redis_client.cache_get_json("re:anything") is None
    redis_client.cache_set_json("re:anything", {"a": 1}, 60)
    assert redis_client.redis_ok() is False


def test_round_trip(fake_redis):
    redis_client.cache_set_json("re:k", [[1.0, 2.0]], 60)
    assert redis_client.cache_get_json("re:k") == [[1.0, 2.0]]
    assert redis_client.redis_ok() is True


def test_broken_redis_degrades_to_miss(monkeypatch):
    monkeypatch.setattr(redis_client, "_client", FakeRedis(broken=True))
    monkeypatch.setattr(redis_client, "_resolved", True)
    assert redis_client.cache_get_json("re:k") is None
    redis_client.cache_set_json("re:k", 1, 60)
    assert redis_client.redis_ok() is False


def test_second_provider_instance_reads_route_from_redis(fake_redis):
    directions = {"status": "OK", "routes": [{"overview_polyline": {"points": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"}}]}
    start, end = LatLng(lat=38.5, lng=-120.2), LatLng(lat=43.252, lng=-126.453)

    first = FakeHTTP(directions=directions)
    GoogleMapsProvider(api_key="k", http=first).get_route(start, end, "WALKING")
    assert keys.directions(start.as_param(), end.as_param(), "WALKING") in fake_redis.store

    second = FakeHTTP(directions=directions)
    path = GoogleMapsProvider(api_key="k", http=second).get_route(start, end, "WALKING")
    assert second.calls == []
    assert path[1] == LatLng(lat=40.7, lng=-120.95)


def test_keys_are_namespaced():
    assert keys.geocode(" Twin Peaks ") == keys.geocode("twin peaks")
    assert keys.directions("1,2", "3,4", "WALKING").startswith("re:directions:walking:")
    assert keys.reverse_geocode(37.75, -122.45) == "re:reverse:37.75000,-122.45000"


def test_elevation_hit_in_redis_is_not_written_back(fake_redis, monkeypatch):
    coords = [LatLng(lat=46.0, lng=8.9), LatLng(lat=46.01, lng=8.9)]
    key = keys.elevation(polyline.encode([(c.lat, c.lng) for c in coords]))
    fake_redis.store[key] = json.dumps(
        [{"location": {"lat": c.lat, "lng": c.lng}, "elevation": 300.0 + i} for i, c in enumerate(coords)]
    )

    writes = []
    monkeypatch.setattr(fake_redis, "set", lambda key, value, ex=None: writes.append(key))

    http = FakeHTTP()
    samples = GoogleMapsProvider(api_key="k", http=http).get_elevations(coords)

    assert [s.elevation for s in samples] == [300.0, 301.0]
    assert http.calls == []
    assert writes == []


def test_fetched_elevations_are_written_once(fake_redis):
    coords = [LatLng(lat=46.0, lng=8.9), LatLng(lat=46.01, lng=8.9)]
    GoogleMapsProvider(api_key="k", http=FakeHTTP()).get_elevations(coords)
    assert keys.elevation(polyline.encode([(c.lat, c.lng) for c in coords])) in fake_redis.store
