"""Public interface re-exports for chain_cache_core."""

from chain_cache_core.interfaces.store import StoreClient

__all__ = [
    "StoreClient",
]
