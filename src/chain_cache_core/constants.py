"""Shared constants for chain-cache."""

from __future__ import annotations

# Connection defaults
DEFAULT_SERVER = "localhost:11211"
DEFAULT_TIMEOUT_SECONDS = 1
DEFAULT_EXPIRY_SECONDS = 3600  # 1 hour

DEFAULT_PORTS: dict[str, int] = {
    "memcached": 11211,
    "redis": 6379,
}

# Namespace category tokens
API_NAMESPACE = "api"
CHAIN_NAMESPACE = "blockchain"

NAMESPACE_SEPARATOR = ":"
