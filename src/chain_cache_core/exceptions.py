"""Custom exception hierarchy for chain-cache.

A cache miss is not an exception: ``CacheService.get`` reports it through
``CacheLookup.hit``.
"""

from __future__ import annotations


class CacheError(Exception):
    """Base exception for all chain-cache errors.

    Carries the key and operation that failed so callers can log or retry.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.operation = operation


class InitError(CacheError):
    """Raised when the store is unreachable or misconfigured at startup."""


class EncodeError(CacheError):
    """Raised when a value cannot be represented as JSON."""


class DecodeError(CacheError):
    """Raised when stored bytes do not match the requested shape."""


class TransportError(CacheError):
    """Raised on network, timeout, or store-side failure of a single operation."""


class InvalidKeyError(CacheError):
    """Raised when a key or namespace component is rejected."""
