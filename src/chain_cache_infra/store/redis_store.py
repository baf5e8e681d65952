"""Redis-backed implementation of StoreClient."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from redis import Redis
from redis.exceptions import RedisError

from chain_cache_core.exceptions import TransportError


@contextmanager
def _translate_errors(operation: str, key: str | None = None) -> Iterator[None]:
    """Map redis-py failures onto TransportError."""
    try:
        yield
    except RedisError as e:
        target = f" for key {key!r}" if key is not None else ""
        msg = f"Redis {operation} failed{target}: {e}"
        raise TransportError(msg, key=key, operation=operation) from e


class RedisStoreClient:
    """Store client backed by a single Redis endpoint."""

    def __init__(self, redis: Redis) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py client."""
        self._redis = redis

    def get(self, key: str) -> bytes | None:
        """Retrieve raw bytes by key."""
        with _translate_errors("get", key):
            value = self._redis.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, value: bytes, expire_seconds: int) -> None:
        """Store raw bytes; Redis has no zero TTL so 0 becomes no expiry."""
        with _translate_errors("set", key):
            self._redis.set(name=key, value=value, ex=expire_seconds or None)

    def delete(self, key: str) -> bool:
        """Delete a key; returns False when it was already absent."""
        with _translate_errors("delete", key):
            return bool(self._redis.delete(key))

    def flush(self) -> None:
        """Remove every key in the configured database."""
        with _translate_errors("flush"):
            self._redis.flushdb()

    def ping(self) -> None:
        """Send PING to the server."""
        with _translate_errors("ping"):
            self._redis.ping()

    def close(self) -> None:
        """Release pooled connections."""
        self._redis.close()
