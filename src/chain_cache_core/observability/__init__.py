"""Observability: structured logging."""

from chain_cache_core.observability.logging import (
    bind_cache_context,
    bind_log_context,
    clear_log_context,
    configure_logging,
)

__all__ = [
    "bind_cache_context",
    "bind_log_context",
    "clear_log_context",
    "configure_logging",
]
