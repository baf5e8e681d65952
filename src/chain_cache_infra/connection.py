"""Store client factory with startup liveness probe."""

from __future__ import annotations

import structlog
from pymemcache.client.base import PooledClient
from redis import Redis

from chain_cache_core.config.settings import resolve_cache_config
from chain_cache_core.constants import DEFAULT_PORTS
from chain_cache_core.exceptions import InitError, TransportError
from chain_cache_core.interfaces.store import StoreClient
from chain_cache_core.models.config import CacheConfig
from chain_cache_core.observability.logging import bind_cache_context
from chain_cache_infra.cache.service import CacheService
from chain_cache_infra.store.memcached_store import MemcachedStoreClient
from chain_cache_infra.store.redis_store import RedisStoreClient

logger = structlog.get_logger()


def initialize_cache(config: CacheConfig | None = None) -> CacheService:
    """Connect to the store and return a ready CacheService.

    Resolves config from the environment when none is given, builds the
    client, and pings every endpoint once. There is no retry: a failed
    probe is fatal to the cache layer and the caller decides whether to
    abort or run without a cache.

    The backend and servers are bound to the log context, so every later
    entry from this process carries them.

    Raises:
        InitError: If an endpoint is malformed or the probe fails.
    """
    if config is None:
        config = resolve_cache_config()
    bind_cache_context(config)

    store = create_store_client(config)
    try:
        store.ping()
    except TransportError as exc:
        store.close()
        logger.error("cache_connection_failed", error=str(exc))
        msg = f"Cannot connect to {config.backend} at {', '.join(config.servers)}: {exc}"
        raise InitError(msg, operation="initialize") from exc

    logger.info(
        "cache_connected",
        timeout_seconds=config.timeout.total_seconds(),
        default_expiry_seconds=int(config.default_expiry.total_seconds()),
    )
    return CacheService(store, config)


def create_store_client(config: CacheConfig) -> StoreClient:
    """Build (without probing) the store client for the configured backend."""
    default_port = DEFAULT_PORTS[config.backend]
    endpoints = [parse_endpoint(server, default_port) for server in config.servers]
    timeout = config.timeout.total_seconds()

    if config.backend == "redis":
        if len(endpoints) != 1:
            msg = f"Redis backend takes exactly one server, got {len(endpoints)}"
            raise InitError(msg, operation="initialize")
        host, port = endpoints[0]
        redis = Redis(
            host=host,
            port=port,
            db=config.redis_db,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        return RedisStoreClient(redis)

    nodes = {
        f"{host}:{port}": PooledClient(
            (host, port),
            connect_timeout=timeout,
            timeout=timeout,
            ignore_exc=False,
            default_noreply=False,
            allow_unicode_keys=True,
        )
        for host, port in endpoints
    }
    return MemcachedStoreClient(nodes)


def parse_endpoint(endpoint: str, default_port: int) -> tuple[str, int]:
    """Split ``host[:port]`` (or ``[v6-host]:port``) into a host/port pair.

    Raises:
        InitError: If the host is empty or the port is not a valid number.
    """
    if endpoint.startswith("["):
        host, _, rest = endpoint[1:].partition("]")
        port_text = rest.removeprefix(":")
    else:
        host, sep, port_text = endpoint.rpartition(":")
        if not sep:
            host, port_text = endpoint, ""

    if not host:
        msg = f"Invalid server endpoint {endpoint!r}: missing host"
        raise InitError(msg, operation="initialize")
    if not port_text:
        return host, default_port

    try:
        port = int(port_text)
    except ValueError as exc:
        msg = f"Invalid server endpoint {endpoint!r}: bad port"
        raise InitError(msg, operation="initialize") from exc
    if not 0 < port < 65536:
        msg = f"Invalid server endpoint {endpoint!r}: port out of range"
        raise InitError(msg, operation="initialize")
    return host, port
