"""Tests for CacheSettings and config resolution."""

from __future__ import annotations

import os
from datetime import timedelta
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from chain_cache_core.config.settings import CacheSettings, resolve_cache_config
from chain_cache_core.models.config import CacheConfig

_CACHE_VARS = (
    "CACHE_SERVERS",
    "CACHE_TIMEOUT_SECONDS",
    "CACHE_DEFAULT_EXPIRY_SECONDS",
    "CACHE_BACKEND",
    "CACHE_REDIS_DB",
    "CACHE_LOG_LEVEL",
    "CACHE_LOG_FORMAT",
    "MEMCACHED_SERVERS",
    "MEMCACHED_TIMEOUT_SECONDS",
    "MEMCACHED_DEFAULT_EXPIRY_SECONDS",
)


def _settings(env: dict[str, str]) -> CacheSettings:
    """Build settings from exactly the given cache variables."""
    clean = {k: v for k, v in os.environ.items() if k not in _CACHE_VARS}
    clean.update(env)
    with patch.dict(os.environ, clean, clear=True):
        return CacheSettings(_env_file=None)  # type: ignore[call-arg]


@pytest.mark.unit
class TestCacheSettings:
    """Defaults and independent per-field overrides."""

    def test_defaults(self) -> None:
        """No overrides gives a single local server, 1s timeout, 1h expiry."""
        s = _settings({})
        assert s.servers == ["localhost:11211"]
        assert s.timeout_seconds == 1
        assert s.default_expiry_seconds == 3600
        assert s.backend == "memcached"

    def test_server_list_override(self) -> None:
        """Comma-delimited servers are split and trimmed."""
        s = _settings({"CACHE_SERVERS": "cache-a:11211, cache-b:11212"})
        assert s.servers == ["cache-a:11211", "cache-b:11212"]

    def test_server_list_drops_blank_entries(self) -> None:
        """Empty segments between commas are ignored."""
        s = _settings({"CACHE_SERVERS": "cache-a:11211,,"})
        assert s.servers == ["cache-a:11211"]

    def test_server_list_all_blank_keeps_default(self) -> None:
        """An override with no endpoints falls back to the default server."""
        s = _settings({"CACHE_SERVERS": " , "})
        assert s.servers == ["localhost:11211"]

    def test_empty_env_var_is_ignored(self) -> None:
        """An empty override is treated as unset."""
        s = _settings({"CACHE_TIMEOUT_SECONDS": ""})
        assert s.timeout_seconds == 1

    def test_duration_overrides(self) -> None:
        """Integer second overrides replace the defaults."""
        s = _settings({"CACHE_TIMEOUT_SECONDS": "5", "CACHE_DEFAULT_EXPIRY_SECONDS": "60"})
        assert s.timeout_seconds == 5
        assert s.default_expiry_seconds == 60

    def test_zero_default_expiry_allowed(self) -> None:
        """Zero default expiry means no expiry and is accepted."""
        s = _settings({"CACHE_DEFAULT_EXPIRY_SECONDS": "0"})
        assert s.default_expiry_seconds == 0

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-2", "0", "10s"])
    def test_malformed_timeout_keeps_default(self, raw: str) -> None:
        """Malformed or non-positive timeout logs and keeps the default."""
        s = _settings({"CACHE_TIMEOUT_SECONDS": raw})
        assert s.timeout_seconds == 1

    @pytest.mark.parametrize("raw", ["soon", "-1", "3.7"])
    def test_malformed_expiry_keeps_default(self, raw: str) -> None:
        """Malformed or negative expiry logs and keeps the default."""
        s = _settings({"CACHE_DEFAULT_EXPIRY_SECONDS": raw})
        assert s.default_expiry_seconds == 3600

    def test_bad_override_does_not_affect_other_fields(self) -> None:
        """Each field resolves independently."""
        s = _settings(
            {
                "CACHE_SERVERS": "cache-a:11211",
                "CACHE_TIMEOUT_SECONDS": "nope",
                "CACHE_DEFAULT_EXPIRY_SECONDS": "120",
            }
        )
        assert s.servers == ["cache-a:11211"]
        assert s.timeout_seconds == 1
        assert s.default_expiry_seconds == 120

    def test_unknown_backend_keeps_default(self) -> None:
        """An unsupported backend name falls back to memcached."""
        s = _settings({"CACHE_BACKEND": "etcd"})
        assert s.backend == "memcached"

    def test_redis_backend_override(self) -> None:
        """Backend and redis db can be selected."""
        s = _settings({"CACHE_BACKEND": "redis", "CACHE_REDIS_DB": "2"})
        assert s.backend == "redis"
        assert s.redis_db == 2


@pytest.mark.unit
class TestLegacyMemcachedNames:
    """MEMCACHED_* variables are honoured for the store fields."""

    def test_legacy_names_override_defaults(self) -> None:
        """Deployments still using MEMCACHED_* names get their values."""
        s = _settings(
            {
                "MEMCACHED_SERVERS": "mc-a:11211,mc-b:11211",
                "MEMCACHED_TIMEOUT_SECONDS": "5",
                "MEMCACHED_DEFAULT_EXPIRY_SECONDS": "600",
            }
        )
        assert s.servers == ["mc-a:11211", "mc-b:11211"]
        assert s.timeout_seconds == 5
        assert s.default_expiry_seconds == 600

    def test_cache_name_wins_over_legacy(self) -> None:
        """When both names are set the CACHE_ value is used."""
        s = _settings({"CACHE_TIMEOUT_SECONDS": "3", "MEMCACHED_TIMEOUT_SECONDS": "5"})
        assert s.timeout_seconds == 3

    def test_empty_cache_name_falls_through_to_legacy(self) -> None:
        """An empty CACHE_ variable counts as unset."""
        s = _settings({"CACHE_SERVERS": "", "MEMCACHED_SERVERS": "mc-a:11211"})
        assert s.servers == ["mc-a:11211"]

    def test_malformed_legacy_value_keeps_default(self) -> None:
        """Legacy names get the same keep-the-default treatment."""
        s = _settings({"MEMCACHED_DEFAULT_EXPIRY_SECONDS": "forever"})
        assert s.default_expiry_seconds == 3600


@pytest.mark.unit
class TestResolveCacheConfig:
    """Conversion of settings into the frozen CacheConfig."""

    def test_to_cache_config(self) -> None:
        """Seconds become timedeltas and servers become a tuple."""
        s = _settings({"CACHE_SERVERS": "a:1,b:2", "CACHE_DEFAULT_EXPIRY_SECONDS": "30"})
        config = resolve_cache_config(s)
        assert config.servers == ("a:1", "b:2")
        assert config.timeout == timedelta(seconds=1)
        assert config.default_expiry == timedelta(seconds=30)

    def test_resolve_reads_environment(self) -> None:
        """Without explicit settings, the environment is read."""
        env = {k: v for k, v in os.environ.items() if k not in _CACHE_VARS}
        env["CACHE_TIMEOUT_SECONDS"] = "3"
        with patch.dict(os.environ, env, clear=True):
            config = resolve_cache_config(CacheSettings(_env_file=None))  # type: ignore[call-arg]
        assert config.timeout == timedelta(seconds=3)

    def test_config_is_frozen(self) -> None:
        """CacheConfig cannot be mutated after construction."""
        config = resolve_cache_config(_settings({}))
        with pytest.raises(ValidationError):
            config.timeout = timedelta(seconds=9)  # type: ignore[misc]

    def test_config_rejects_empty_servers(self) -> None:
        """CacheConfig requires at least one server."""
        with pytest.raises(ValidationError):
            CacheConfig(servers=(), timeout=timedelta(seconds=1), default_expiry=timedelta(0))

    def test_config_rejects_zero_timeout(self) -> None:
        """CacheConfig requires a positive timeout."""
        with pytest.raises(ValidationError, match="timeout must be positive"):
            CacheConfig(
                servers=("a:1",),
                timeout=timedelta(0),
                default_expiry=timedelta(0),
            )
