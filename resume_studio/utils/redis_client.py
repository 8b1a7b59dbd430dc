"""Redis client utilities for editor sessions, export locks and cached analyses."""

import atexit
import json
import logging
from threading import Lock
from typing import Any, Optional

import fakeredis
import redis
from redis.exceptions import LockError
from redis.lock import Lock as RedisLock

logger = logging.getLogger(__name__)


def in_process_redis() -> "RedisClient":
    """Redis stand-in living in this process, for when no server is available."""
    connection = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    return RedisClient(connection)


class RedisClient:
    """Redis client wrapper with utility methods."""

    def __init__(self, redis_connection):
        """Initialize Redis client.

        Args:
            redis_connection: Redis connection (redis-py or fakeredis)
        """
        self.client = redis_connection

    @property
    def backend(self) -> str:
        return "memory" if isinstance(self.client, fakeredis.FakeRedis) else "redis"

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        try:
            value = self.client.get(key)
            if value:
                return json.loads(value)
        except Exception as e:
            logger.error(f"Error getting from cache: {e}")
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful
        """
        try:
            self.client.set(key, json.dumps(value), ex=ttl)
            return True
        except Exception as e:
            logger.error(f"Error setting cache: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from cache.

        Args:
            key: Cache key

        Returns:
            True if successful
        """
        try:
            self.client.delete(key)
            return True
        except Exception as e:
            logger.error(f"Error deleting from cache: {e}")
            return False

    def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        try:
            return self.client.exists(key) > 0
        except Exception as e:
            logger.error(f"Error checking cache existence: {e}")
            return False

    def acquire_lock(self, key: str, ttl: int) -> Optional[RedisLock]:
        """Take a lock without waiting.

        The lock holds a random token, so releasing it never frees a lock
        someone else took after this one expired.

        Args:
            key: Lock key
            ttl: Seconds before the lock expires on its own

        Returns:
            The held lock, or None if it is taken
        """
        try:
            lock = self.client.lock(key, timeout=ttl, blocking=False)
            if lock.acquire():
                return lock
        except Exception as e:
            logger.error(f"Error acquiring lock {key}: {e}")
        return None

    def release_lock(self, lock: RedisLock) -> None:
        try:
            lock.release()
        except LockError as e:
            logger.warning(f"Lock {lock.name} expired before release: {e}")
        except Exception as e:
            logger.error(f"Error releasing lock {lock.name}: {e}")


def cache_key(*args, **kwargs) -> str:
    """Generate cache key from arguments.

    Args:
        *args: Positional arguments
        **kwargs: Keyword arguments

    Returns:
        Generated cache key
    """
    key_parts = [str(arg) for arg in args]
    key_parts.extend([f"{k}:{v}" for k, v in sorted(kwargs.items())])
    return ":".join(key_parts)


class RedisConnectionManager:
    """
    Process-wide Redis connection.

    The connection is created on first use, once, behind a lock. A failed
    attempt is retried on the next use. The connection is closed at
    interpreter shutdown.
    """

    def __init__(self):
        self._client: Optional[RedisClient] = None
        self._lock = Lock()
        self._url: Optional[str] = None
        self._allow_fallback = True
        self._fallback = in_process_redis()
        atexit.register(self.close)

    def configure(self, url: Optional[str], allow_fallback: bool = True) -> None:
        """Point the manager at a Redis URL; drops any existing connection."""
        self.close()
        with self._lock:
            self._url = url or None
            self._allow_fallback = allow_fallback

    def get_client(self) -> RedisClient:
        """Return the shared client, connecting on first use.

        Raises:
            redis.RedisError: If Redis is unreachable and fallback is not allowed
        """
        if self._client is not None:
            return self._client

        with self._lock:
            # Another thread may have connected while we waited
            if self._client is not None:
                return self._client

            if not self._url:
                logger.info("Redis not configured, using in-process fakeredis")
                self._client = in_process_redis()
                return self._client

            try:
                connection = redis.from_url(self._url, decode_responses=True)
                connection.ping()
            except redis.RedisError as e:
                logger.error(f"Failed to connect to Redis: {e}")
                if not self._allow_fallback:
                    raise
                # Not cached, the next call tries Redis again
                return self._fallback

            logger.info(f"Redis connected: {self._url}")
            self._client = RedisClient(connection)
            return self._client

    def status(self) -> str:
        """'connected', 'memory' or 'disconnected', for health checks."""
        try:
            client = self.get_client()
            client.client.ping()
        except Exception:
            return "disconnected"
        return "connected" if client.backend == "redis" else client.backend

    def close(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            try:
                client.client.close()
            except Exception as e:
                logger.error(f"Error closing Redis connection: {e}")


redis_manager = RedisConnectionManager()


def get_redis() -> RedisClient:
    """Shared Redis client."""
    return redis_manager.get_client()
