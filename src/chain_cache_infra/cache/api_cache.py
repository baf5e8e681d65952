"""API response cache."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, TypeVar

from chain_cache_core.constants import API_NAMESPACE

if TYPE_CHECKING:
    from chain_cache_infra.cache.service import CacheLookup, CacheService

T = TypeVar("T")


class APIResponseCache:
    """Cache for API responses, keyed by ``api:<endpoint>:<params>``.

    ``params`` is used verbatim. Callers must serialize query parameters in a
    stable order (e.g. sorted ``urlencode``); ``page=2&limit=5`` and
    ``limit=5&page=2`` are different entries.
    """

    def __init__(self, cache: CacheService) -> None:
        """Initialize with a CacheService."""
        self._cache = cache

    def set_response(
        self,
        endpoint: str,
        params: str,
        response: object,
        ttl: timedelta | float = 0,
    ) -> None:
        """Cache a response body for an endpoint and parameter string."""
        self._cache.set_namespaced(API_NAMESPACE, endpoint, params, response, ttl)

    def get_response(self, endpoint: str, params: str, target: type[T]) -> CacheLookup[T]:
        """Retrieve a cached response for an endpoint and parameter string."""
        return self._cache.get_namespaced(API_NAMESPACE, endpoint, params, target)
