"""Core typed cache operations over a StoreClient."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from types import TracebackType
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from chain_cache_core.exceptions import DecodeError, EncodeError, TransportError
from chain_cache_core.keys import namespace_key
from chain_cache_core.serialization import decode, encode

if TYPE_CHECKING:
    from chain_cache_core.interfaces.store import StoreClient
    from chain_cache_core.models.config import CacheConfig

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Outcome of a read: ``hit`` tells a miss apart from a stored ``None``."""

    hit: bool
    value: T | None = None

    def __bool__(self) -> bool:
        return self.hit


def expiry_seconds(ttl: timedelta | float, default_expiry: timedelta) -> int:
    """Convert a TTL to the store's whole-second expiry.

    Fractional seconds are truncated, not rounded, so a TTL under one second
    truncates to zero and therefore falls back to ``default_expiry``.
    """
    seconds = int(ttl.total_seconds()) if isinstance(ttl, timedelta) else int(ttl)
    if seconds < 0:
        msg = f"ttl must not be negative, got {ttl!r}"
        raise ValueError(msg)
    if seconds == 0:
        seconds = int(default_expiry.total_seconds())
    return seconds


class CacheService:
    """Typed get/set/delete/flush against the store.

    Construct once per process (see ``initialize_cache``) and pass it to
    callers. Safe to share between threads; every call is one blocking
    round-trip bounded by the configured timeout, with no retries.
    """

    def __init__(self, store: StoreClient, config: CacheConfig) -> None:
        """Initialize with a connected store client and its config."""
        self._store = store
        self._config = config

    @property
    def config(self) -> CacheConfig:
        """The configuration this service was built from."""
        return self._config

    def set(self, key: str, value: object, ttl: timedelta | float = 0) -> None:
        """Store a value; a zero ``ttl`` applies the configured default expiry.

        Raises:
            EncodeError: If the value is not JSON-representable.
            TransportError: If the store write fails.
        """
        try:
            data = encode(value)
        except EncodeError as e:
            e.key, e.operation = key, "set"
            logger.warning("cache_set_failed", key=key, error=str(e))
            raise

        expire = expiry_seconds(ttl, self._config.default_expiry)
        try:
            self._store.set(key, data, expire)
        except TransportError as e:
            logger.warning("cache_set_failed", key=key, error=str(e))
            raise
        logger.debug("cache_set", key=key, expire_seconds=expire, size=len(data))

    def get(self, key: str, target: type[T]) -> CacheLookup[T]:
        """Read a value and validate it against ``target``.

        A miss is returned as ``CacheLookup(hit=False)``, never raised.

        Raises:
            DecodeError: If the stored bytes do not fit ``target``.
            TransportError: If the store read fails.
        """
        try:
            data = self._store.get(key)
        except TransportError as e:
            logger.warning("cache_get_failed", key=key, error=str(e))
            raise

        if data is None:
            logger.debug("cache_miss", key=key)
            return CacheLookup(hit=False)

        try:
            value = decode(data, target)
        except DecodeError as e:
            e.key, e.operation = key, "get"
            logger.warning("cache_decode_failed", key=key, error=str(e))
            raise
        logger.debug("cache_hit", key=key)
        return CacheLookup(hit=True, value=value)

    def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key succeeds."""
        if self._store.delete(key):
            logger.debug("cache_deleted", key=key)
        else:
            logger.debug("cache_delete_absent", key=key)

    def flush(self) -> None:
        """Remove every entry in the store, across all namespaces.

        Destructive and unscoped: meant for maintenance and tests, not
        steady-state traffic.
        """
        self._store.flush()
        logger.info("cache_flushed", servers=list(self._config.servers))

    def set_namespaced(
        self,
        category: str,
        discriminator: str,
        identifier: str,
        value: object,
        ttl: timedelta | float = 0,
    ) -> None:
        """Store a value under ``<category>:<discriminator>:<identifier>``."""
        self.set(namespace_key(category, discriminator, identifier), value, ttl)

    def get_namespaced(
        self,
        category: str,
        discriminator: str,
        identifier: str,
        target: type[T],
    ) -> CacheLookup[T]:
        """Read a value stored under ``<category>:<discriminator>:<identifier>``."""
        return self.get(namespace_key(category, discriminator, identifier), target)

    def close(self) -> None:
        """Close the underlying store client."""
        self._store.close()

    def __enter__(self) -> CacheService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
