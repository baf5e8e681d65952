"""Resolved, immutable cache connection configuration."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CacheConfig(BaseModel):
    """Connection parameters derived once at startup.

    ``default_expiry`` of zero means this layer enforces no expiry.
    """

    model_config = ConfigDict(frozen=True)

    servers: tuple[str, ...] = Field(
        min_length=1,
        description="Ordered store endpoints as host:port",
    )
    timeout: timedelta = Field(description="Per-operation network deadline")
    default_expiry: timedelta = Field(description="TTL applied when a write passes zero")
    backend: Literal["memcached", "redis"] = Field(
        default="memcached",
        description="Store protocol spoken to the servers",
    )
    redis_db: int = Field(default=0, ge=0, description="Redis logical database")

    @field_validator("timeout")
    @classmethod
    def timeout_positive(cls, value: timedelta) -> timedelta:
        """Reject zero or negative timeouts."""
        if value <= timedelta(0):
            msg = "timeout must be positive"
            raise ValueError(msg)
        return value

    @field_validator("default_expiry")
    @classmethod
    def expiry_not_negative(cls, value: timedelta) -> timedelta:
        """Reject negative default expiry."""
        if value < timedelta(0):
            msg = "default_expiry must not be negative"
            raise ValueError(msg)
        return value
