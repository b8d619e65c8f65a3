"""Optional Redis layer in front of mapping provider responses.

Every operation degrades to a cache miss when Redis is unset or unreachable,
so providers never fail because of the cache.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis
from redis.exceptions import RedisError

from route_elevation.config import settings

log = logging.getLogger(__name__)

_client: Optional[redis.Redis] = None
_resolved = False


def get_redis() -> Optional[redis.Redis]:
    """Connect once, on first use; ``None`` when disabled or down."""
    global _client, _resolved
    if _resolved:
        return _client
    _resolved = True

    if not settings.redis_url:
        log.debug("ROUTE_ELEVATION_REDIS_URL unset, provider cache is in-process only")
        return None

    try:
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True, socket_connect_timeout=3)
        client.ping()
    except (RedisError, ValueError) as exc:
        log.warning("Redis unavailable (%s), running without cache", exc)
        return None

    log.info("Redis connected: %s", settings.redis_url)
    _client = client
    return _client


def reset_redis() -> None:
    """Drop the connection so the next call re-reads settings."""
    global _client, _resolved
    _client = None
    _resolved = False


def redis_ok() -> bool:
    client = get_redis()
    if client is None:
        return False
    try:
        return bool(client.ping())
    except RedisError:
        return False


def cache_get_json(key: str) -> Optional[Any]:
    client = get_redis()
    if client is None:
        return None
    try:
        raw = client.get(key)
    except RedisError as exc:
        log.debug("cache get %s failed: %s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        log.debug("cache entry %s is not JSON, ignoring", key)
        return None


def cache_set_json(key: str, value: Any, ttl: int) -> None:
    client = get_redis()
    if client is None:
        return
    try:
        client.set(key, json.dumps(value), ex=ttl)
    except RedisError as exc:
        log.debug("cache set %s failed: %s", key, exc)
