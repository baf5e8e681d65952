"""Abstract store client interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StoreClient(Protocol):
    """Byte-level access to the distributed key-value store.

    Implementations translate library failures into ``TransportError``
    (or ``InvalidKeyError`` for keys the store refuses) and never retry.
    """

    def get(self, key: str) -> bytes | None:
        """Retrieve raw bytes by key, or None if absent or expired."""
        ...

    def set(self, key: str, value: bytes, expire_seconds: int) -> None:
        """Store raw bytes; ``expire_seconds`` of 0 means no expiry."""
        ...

    def delete(self, key: str) -> bool:
        """Delete a key. Returns whether it existed."""
        ...

    def flush(self) -> None:
        """Remove every entry in the store."""
        ...

    def ping(self) -> None:
        """Round-trip to every endpoint; raise TransportError if any fails."""
        ...

    def close(self) -> None:
        """Release sockets held by the client."""
        ...
