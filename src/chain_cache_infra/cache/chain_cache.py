"""Blockchain data cache."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, TypeVar

from chain_cache_core.constants import CHAIN_NAMESPACE

if TYPE_CHECKING:
    from chain_cache_infra.cache.service import CacheLookup, CacheService

T = TypeVar("T")


class ChainDataCache:
    """Cache for ledger data, keyed by ``blockchain:<data_type>:<identifier>``."""

    def __init__(self, cache: CacheService) -> None:
        """Initialize with a CacheService."""
        self._cache = cache

    def set_data(
        self,
        data_type: str,
        identifier: str,
        data: object,
        ttl: timedelta | float = 0,
    ) -> None:
        """Cache chain data (block, transaction, balance...) by type and id."""
        self._cache.set_namespaced(CHAIN_NAMESPACE, data_type, identifier, data, ttl)

    def get_data(self, data_type: str, identifier: str, target: type[T]) -> CacheLookup[T]:
        """Retrieve cached chain data by type and id."""
        return self._cache.get_namespaced(CHAIN_NAMESPACE, data_type, identifier, target)
