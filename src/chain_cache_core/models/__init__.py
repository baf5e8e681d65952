"""Public model re-exports for chain_cache_core."""

from chain_cache_core.models.config import CacheConfig

__all__ = [
    "CacheConfig",
]
