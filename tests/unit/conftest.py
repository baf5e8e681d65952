"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from structlog.contextvars import clear_contextvars

from chain_cache_core.models.config import CacheConfig
from chain_cache_infra.cache.service import CacheService
from tests.mocks.mock_settings import make_config
from tests.mocks.mock_store import FakeStore


@pytest.fixture
def cache_config() -> CacheConfig:
    """Return a CacheConfig with a one-hour default expiry."""
    return make_config()


@pytest.fixture
def fake_store() -> FakeStore:
    """Return an empty in-memory store."""
    return FakeStore()


@pytest.fixture
def cache(fake_store: FakeStore, cache_config: CacheConfig) -> CacheService:
    """Return a CacheService over the fake store."""
    return CacheService(fake_store, cache_config)


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers and drop bound log context.

    configure_logging() replaces root handlers; without cleanup, stale
    StreamHandlers write to pytest-captured streams after they close.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
    clear_contextvars()
