"""Memcached-backed implementation of StoreClient."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from pymemcache.client.base import PooledClient
from pymemcache.client.rendezvous import RendezvousHash
from pymemcache.exceptions import MemcacheError, MemcacheIllegalInputError

from chain_cache_core.exceptions import InvalidKeyError, TransportError


@contextmanager
def _translate_errors(operation: str, key: str | None = None) -> Iterator[None]:
    """Map pymemcache and socket failures onto the cache error taxonomy."""
    try:
        yield
    except MemcacheIllegalInputError as e:
        msg = f"Memcached rejected key {key!r}: {e}"
        raise InvalidKeyError(msg, key=key, operation=operation) from e
    except (MemcacheError, OSError) as e:
        target = f" for key {key!r}" if key is not None else ""
        msg = f"Memcached {operation} failed{target}: {e}"
        raise TransportError(msg, key=key, operation=operation) from e


class MemcachedStoreClient:
    """Store client over one pooled pymemcache client per server.

    Keys are routed to a node by rendezvous hashing over the node names.
    A failing node is never skipped or marked dead: every call goes to
    its socket and raises.
    """

    def __init__(self, nodes: Mapping[str, PooledClient]) -> None:
        """Initialize with pooled clients keyed by ``host:port``."""
        self._nodes = dict(nodes)
        self._hasher = RendezvousHash(nodes=list(self._nodes))

    def _node_for(self, key: str) -> PooledClient:
        return self._nodes[self._hasher.get_node(key)]

    def get(self, key: str) -> bytes | None:
        """Retrieve raw bytes by key."""
        with _translate_errors("get", key):
            value = self._node_for(key).get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, value: bytes, expire_seconds: int) -> None:
        """Store raw bytes with an expiry in seconds."""
        with _translate_errors("set", key):
            stored = self._node_for(key).set(key, value, expire=expire_seconds, noreply=False)
        if not stored:
            msg = f"Memcached did not store key {key!r}"
            raise TransportError(msg, key=key, operation="set")

    def delete(self, key: str) -> bool:
        """Delete a key; returns False when it was already absent."""
        with _translate_errors("delete", key):
            return bool(self._node_for(key).delete(key, noreply=False))

    def flush(self) -> None:
        """Invalidate every item on every server."""
        with _translate_errors("flush"):
            for node in self._nodes.values():
                node.flush_all(noreply=False)

    def ping(self) -> None:
        """Ask every node for its version."""
        with _translate_errors("ping"):
            for node in self._nodes.values():
                node.version()

    def close(self) -> None:
        """Close all node connections."""
        for node in self._nodes.values():
            node.close()
