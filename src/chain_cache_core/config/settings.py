"""Cache settings using pydantic-settings.

Each field can be overridden independently from the environment
(``CACHE_`` prefix). Servers, timeout and default expiry also accept the
legacy ``MEMCACHED_`` names; the ``CACHE_`` name wins when both are set.
A malformed override never blocks startup: it is logged and the field
keeps its default.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated, Any, Literal

import structlog
from pydantic import (
    AliasChoices,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from chain_cache_core.constants import (
    DEFAULT_EXPIRY_SECONDS,
    DEFAULT_SERVER,
    DEFAULT_TIMEOUT_SECONDS,
)
from chain_cache_core.models.config import CacheConfig

logger = structlog.get_logger()


class CacheSettings(BaseSettings):
    """Environment-provided overrides layered onto hard defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # --- Store ---
    servers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [DEFAULT_SERVER],
        validation_alias=AliasChoices("CACHE_SERVERS", "MEMCACHED_SERVERS"),
        description="Comma-delimited host:port endpoints",
    )
    backend: Literal["memcached", "redis"] = Field(
        default="memcached",
        description="Store backend: 'memcached' or 'redis' (single endpoint)",
    )
    redis_db: int = Field(
        default=0,
        ge=0,
        description="Redis logical database (redis backend only)",
    )

    # --- Timing ---
    timeout_seconds: int = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        validation_alias=AliasChoices("CACHE_TIMEOUT_SECONDS", "MEMCACHED_TIMEOUT_SECONDS"),
        description="Connect and per-operation timeout in seconds",
    )
    default_expiry_seconds: int = Field(
        default=DEFAULT_EXPIRY_SECONDS,
        ge=0,
        validation_alias=AliasChoices(
            "CACHE_DEFAULT_EXPIRY_SECONDS", "MEMCACHED_DEFAULT_EXPIRY_SECONDS"
        ),
        description="TTL used when a write passes zero; 0 disables expiry",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level name",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log renderer",
    )

    @field_validator("servers", mode="before")
    @classmethod
    def split_servers(cls, value: Any) -> Any:  # noqa: ANN401
        """Split a comma-delimited override, dropping blank entries."""
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, list | tuple):
            return value
        servers = [str(item).strip() for item in value if str(item).strip()]
        if not servers:
            logger.warning(
                "cache_setting_invalid",
                field="servers",
                value=value,
                default=[DEFAULT_SERVER],
            )
            return [DEFAULT_SERVER]
        return servers

    @field_validator(
        "timeout_seconds",
        "default_expiry_seconds",
        "backend",
        "redis_db",
        "log_format",
        mode="wrap",
    )
    @classmethod
    def keep_default_on_invalid(
        cls,
        value: Any,  # noqa: ANN401
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:  # noqa: ANN401
        """Fall back to the field default instead of failing validation."""
        try:
            return handler(value)
        except ValidationError as exc:
            assert info.field_name is not None
            default = cls.model_fields[info.field_name].default
            logger.warning(
                "cache_setting_invalid",
                field=info.field_name,
                value=value,
                default=default,
                error=exc.errors(include_url=False)[0]["msg"],
            )
            return default

    def to_cache_config(self) -> CacheConfig:
        """Freeze these settings into a CacheConfig."""
        return CacheConfig(
            servers=tuple(self.servers),
            timeout=timedelta(seconds=self.timeout_seconds),
            default_expiry=timedelta(seconds=self.default_expiry_seconds),
            backend=self.backend,
            redis_db=self.redis_db,
        )


def resolve_cache_config(settings: CacheSettings | None = None) -> CacheConfig:
    """Read settings from the environment (unless given) and freeze them."""
    if settings is None:
        settings = CacheSettings()
    return settings.to_cache_config()
