"""Typed cache service and namespace helpers."""

from chain_cache_infra.cache.api_cache import APIResponseCache
from chain_cache_infra.cache.chain_cache import ChainDataCache
from chain_cache_infra.cache.service import CacheLookup, CacheService, expiry_seconds

__all__ = [
    "APIResponseCache",
    "CacheLookup",
    "CacheService",
    "ChainDataCache",
    "expiry_seconds",
]
