"""
Storage Module - Black Box Interface

Purpose: Own the Redis client shared by player records and rate-limit windows
Interface: StorageModule.connect(), StorageModule.disconnect()
Hidden: Connection URL handling, credential redaction, startup reachability check

An unreachable server does not stop startup; the health endpoint reports it.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import redis.asyncio as redis
from redis.exceptions import RedisError

from burningfury.config.provider import StorageConfig

logger = logging.getLogger(__name__)

HEALTH_CHECK_INTERVAL_SECONDS = 30


def redact_url(url: str) -> str:
    """Drop credentials from a Redis URL so it can be logged."""
    parts = urlsplit(url)
    host = parts.hostname or "localhost"
    port = f":{parts.port}" if parts.port else ""
    return f"{parts.scheme}://{host}{port}{parts.path}"


class StorageModule:
    """Lazily created Redis client for the configured server."""

    def __init__(self, config: StorageConfig):
        self.config = config
        self._client: Optional[redis.Redis] = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> redis.Redis:
        """Create the client once and check the server answers."""
        if self._client is not None:
            return self._client

        self._client = redis.from_url(
            self.config.redis_url,
            decode_responses=True,
            health_check_interval=HEALTH_CHECK_INTERVAL_SECONDS,
        )
        location = redact_url(self.config.redis_url)
        try:
            await self._client.ping()
            logger.info(f"Connected to Redis at {location}")
        except RedisError as e:
            logger.warning(f"Redis at {location} is not reachable yet: {e}")
        return self._client

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")


__all__ = ["StorageModule", "redact_url"]
