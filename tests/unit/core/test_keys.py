"""Tests for namespace key construction."""

from __future__ import annotations

import pytest

from chain_cache_core.exceptions import InvalidKeyError
from chain_cache_core.keys import namespace_key


@pytest.mark.unit
class TestNamespaceKey:
    """Tests for namespace_key."""

    def test_joins_with_colons(self) -> None:
        """Key is category:discriminator:identifier."""
        assert namespace_key("api", "/users", "page=2") == "api:/users:page=2"

    def test_is_deterministic(self) -> None:
        """Same inputs always produce the same key."""
        assert namespace_key("blockchain", "block", "42") == namespace_key(
            "blockchain", "block", "42"
        )

    def test_identifier_may_contain_colons(self) -> None:
        """The tail segment is unrestricted."""
        assert namespace_key("blockchain", "tx", "0xab:1") == "blockchain:tx:0xab:1"

    def test_distinct_inputs_do_not_collide(self) -> None:
        """Moving a colon between segments is rejected rather than colliding."""
        assert namespace_key("api", "/users", "page=2") != namespace_key("api", "/users", "page=3")
        with pytest.raises(InvalidKeyError):
            namespace_key("api", "/users:page", "2")

    @pytest.mark.parametrize(
        ("category", "discriminator"),
        [("", "/users"), ("api", ""), ("a:b", "/users"), ("api", "x:y")],
    )
    def test_rejects_bad_prefix_segments(self, category: str, discriminator: str) -> None:
        """Empty or colon-bearing category/discriminator raise InvalidKeyError."""
        with pytest.raises(InvalidKeyError) as exc_info:
            namespace_key(category, discriminator, "id")
        assert exc_info.value.operation == "namespace_key"
