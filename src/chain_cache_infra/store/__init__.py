"""Store client implementations."""

from chain_cache_infra.store.memcached_store import MemcachedStoreClient
from chain_cache_infra.store.redis_store import RedisStoreClient

__all__ = [
    "MemcachedStoreClient",
    "RedisStoreClient",
]
