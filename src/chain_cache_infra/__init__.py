"""Store clients, connection management and the cache service."""
