"""Integration test fixtures: a real memcached on localhost:11211."""

from __future__ import annotations

import socket
import time
from collections.abc import Generator
from datetime import timedelta

import pytest

from chain_cache_infra.cache.service import CacheService
from chain_cache_infra.connection import initialize_cache
from tests.mocks.mock_settings import make_config

# ---------------------------------------------------------------------------
# Service health checks (with retry for CI container start-up)
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 5,
    delay: float = 1.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_memcached_up = _tcp_reachable("localhost", 11211)

require_memcached = pytest.mark.skipif(
    not _memcached_up,
    reason="memcached not reachable on localhost:11211 (docker run -p 11211:11211 memcached)",
)


# ---------------------------------------------------------------------------
# Cache fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memcached_cache() -> Generator[CacheService, None, None]:
    """Function-scoped CacheService with a 1s default expiry, flushed around each test."""
    if not _memcached_up:
        pytest.skip("memcached not available")

    cache = initialize_cache(make_config(default_expiry=timedelta(seconds=1)))
    cache.flush()
    yield cache
    cache.flush()
    cache.close()
