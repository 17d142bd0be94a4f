"""Redis-backed ephemeral set cache.

Provides the set primitives the cached group intersector uses as scratch
space: union-add with TTL, server-side intersection, and best-effort
deletion. Nothing stored here outlives a single authorization check;
TTL only cleans up after a crash between write and delete.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

import redis.asyncio as redis

from app.core.config import get_settings
from app.core.constants import PERMISSION_SCRATCH_TTL_SECONDS
from app.infrastructure.exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SetCacheService:
    """Async Redis set cache with TTL support.

    Uses app.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown. Unlike a read-through cache,
    Redis sits on the decision path in redis mode, so while it is down
    every command first tries to connect again (at most once per
    reconnect backoff) instead of staying disabled until restart.
    Intersect failures are raised (CacheUnavailableError) so a check
    never decides on data it could not read.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        reconnect_backoff_seconds: float | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When
                given, the service is considered connected.
            reconnect_backoff_seconds: Minimum gap between connection
                attempts while Redis is down; defaults to settings.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None
        self._closed = False
        self._reconnect_backoff = (
            self.settings.redis_reconnect_backoff_seconds
            if reconnect_backoff_seconds is None
            else reconnect_backoff_seconds
        )
        self._next_attempt_at = 0.0

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup.

        An unreachable Redis is logged, not raised; the next command
        retries once the backoff has passed.
        """
        self._closed = False
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis connection failed: %s. Retrying in %ss.",
                e,
                self._reconnect_backoff,
            )
            self._connected = False
            self._next_attempt_at = time.monotonic() + self._reconnect_backoff
            await self._close_quietly(client)
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis set cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown; no reconnects afterwards."""
        self._closed = True
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis set cache disconnected")

    async def _close_quietly(self, client: redis.Redis) -> None:
        try:
            await client.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")

    async def _reconnect(self) -> bool:
        """Drop the current connection and connect again. Returns True if reconnected."""
        stale, self.redis, self._connected = self.redis, None, False
        if stale is not None:
            await self._close_quietly(stale)
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ensure_connected(self) -> bool:
        """Return True if usable, connecting first while Redis is down.

        Attempts are rate-limited by the reconnect backoff. After
        disconnect() this never reconnects.
        """
        if self.is_available():
            return True
        if self._closed or time.monotonic() < self._next_attempt_at:
            return False
        await self.connect()
        return self.is_available()

    async def _run(self, operation: str, command: Callable[[], Awaitable[T]]) -> T:
        """Run a Redis command, reconnecting once on connection loss.

        Raises:
            CacheUnavailableError: If Redis is unavailable or the command fails.
        """
        if not await self.ensure_connected():
            raise CacheUnavailableError(operation)
        try:
            return await command()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect():
                try:
                    return await command()
                except redis.RedisError as retry_error:
                    raise CacheUnavailableError(operation, str(retry_error)) from retry_error
            raise CacheUnavailableError(operation, str(e)) from e
        except redis.RedisError as e:
            logger.exception("Cache %s error", operation)
            raise CacheUnavailableError(operation, str(e)) from e

    async def save_set(
        self,
        key: str,
        members: Iterable[str],
        ttl: int = PERMISSION_SCRATCH_TTL_SECONDS,
    ) -> None:
        """Union-add members into the set at key and (re)set its TTL.

        Idempotent: adding the same members again changes nothing but the
        TTL. An empty member list writes nothing; Redis has no empty sets
        and a missing key intersects as empty.

        Args:
            key: Scratch key (use app.infrastructure.cache.keys builders).
            members: Group ids to add.
            ttl: Time-to-live in seconds.

        Raises:
            CacheUnavailableError: If Redis is unavailable or the write fails.
        """
        values = list(members)
        if not values:
            logger.debug("Cache SADD skipped for %s (no members)", key)
            return

        async def command() -> None:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.sadd(key, *values)
                pipe.expire(key, ttl)
                await pipe.execute()

        await self._run("save_set", command)
        logger.debug("Cache SADD: %s (%s members, TTL: %ss)", key, len(values), ttl)

    async def intersect(self, key_a: str, key_b: str) -> set[str]:
        """Return the server-side intersection of two sets.

        Only the intersection travels back to the caller.

        Raises:
            CacheUnavailableError: If Redis is unavailable or SINTER fails.
        """
        result = await self._run("intersect", lambda: self.redis.sinter([key_a, key_b]))
        logger.debug("Cache SINTER: %s & %s -> %s members", key_a, key_b, len(result))
        return set(result)

    async def delete_keys(self, *keys: str) -> int:
        """Delete scratch keys. Best-effort: failures are logged, not raised.

        Returns:
            Number of keys deleted (0 on failure).
        """
        if not keys:
            return 0
        try:
            deleted = await self._run("delete_keys", lambda: self.redis.delete(*keys))
        except CacheUnavailableError as e:
            logger.warning(
                "Cache DELETE failed for %s: %s (keys expire after TTL)",
                ", ".join(keys),
                e.details.get("reason"),
            )
            return 0
        logger.debug("Cache DELETE: %s", ", ".join(keys))
        return int(deleted or 0)
