"""
Sliding-window rate limiter for feedback submissions.

Counts permits per key (client IP) over a rolling window shared by every
API process through Redis. Requests over the limit are rejected
immediately; nothing is queued.
"""

import logging
import math
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

KEY_PREFIX = "ratelimit:feedback:"


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of a permit request."""
    allowed: bool
    remaining: int
    retry_after: Optional[int] = None


class SlidingWindowRateLimiter:
    """
    Distributed rolling-window limiter using a Redis sorted set per key.

    Each permit is a member scored by its timestamp. Pruning, recording and
    counting run in one MULTI/EXEC transaction, so concurrent requests from
    any process cannot both take the last permit. A rejected request removes
    its own member again. Keys expire with the window, so idle clients leave
    nothing behind.
    """

    def __init__(
        self,
        redis_client,
        limit: int = 10,
        window_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            redis_client: Async Redis client
            limit: Permits per key per window
            window_seconds: Rolling window length
            clock: Wall-clock time source shared across processes (injectable for tests)
        """
        self.redis = redis_client
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock

    @staticmethod
    def _key(key: str) -> str:
        return f"{KEY_PREFIX}{key}"

    async def acquire(self, key: str) -> RateLimitDecision:
        """
        Take a permit for key if one is available.

        Fails open when Redis is unreachable: feedback is best effort and
        a storage outage must not turn into 429s.
        """
        now = self.clock()
        redis_key = self._key(key)
        member = f"{now:.6f}:{uuid.uuid4().hex}"

        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.zremrangebyscore(redis_key, 0, now - self.window_seconds)
                pipe.zadd(redis_key, {member: now})
                pipe.zcard(redis_key)
                pipe.zrange(redis_key, 0, 0, withscores=True)
                pipe.expire(redis_key, math.ceil(self.window_seconds))
                _, _, count, oldest, _ = await pipe.execute()

            if count > self.limit:
                await self.redis.zrem(redis_key, member)
                oldest_at = oldest[0][1] if oldest else now
                retry_after = max(1, math.ceil(oldest_at + self.window_seconds - now))
                logger.warning(f"Rate limit exceeded for {key} ({count - 1}/{self.limit})")
                return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

            return RateLimitDecision(allowed=True, remaining=self.limit - count)

        except RedisError as e:
            logger.error(f"Rate limit check error for {key}: {e}")
            return RateLimitDecision(allowed=True, remaining=self.limit)

    async def reset(self, key: str) -> None:
        """Forget recorded hits for one key."""
        await self.redis.delete(self._key(key))
