"""Namespace key construction."""

from __future__ import annotations

from chain_cache_core.constants import NAMESPACE_SEPARATOR
from chain_cache_core.exceptions import InvalidKeyError


def namespace_key(category: str, discriminator: str, identifier: str) -> str:
    """Compose ``<category>:<discriminator>:<identifier>``.

    Category and discriminator must be non-empty and colon-free so the key
    splits back into exactly one triple; identifier is the tail and may
    contain anything. The caller must make ``identifier`` a deterministic
    function of its request (e.g. sorted query parameters).
    """
    for part_name, part in (("category", category), ("discriminator", discriminator)):
        if not part:
            msg = f"Namespace {part_name} must not be empty"
            raise InvalidKeyError(msg, operation="namespace_key")
        if NAMESPACE_SEPARATOR in part:
            msg = f"Namespace {part_name} {part!r} must not contain {NAMESPACE_SEPARATOR!r}"
            raise InvalidKeyError(msg, operation="namespace_key")
    return NAMESPACE_SEPARATOR.join((category, discriminator, identifier))
