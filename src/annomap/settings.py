"""
Centralized settings for annomap.

All fields can be set through ``ANNOMAP_*`` environment variables (e.g.
``ANNOMAP_WRITE_BACK=false``) or a ``.env`` file in the working directory.

Fields
──────
marker_package : Module holding the host's marker types (seed list prefix)
write_back     : Store the canonical mapping back into the scope on a miss
atomic         : Serialise first resolution per resolver (no duplicated remaps)
strict         : Raise when a scope has no preliminary mapping
log_level      : Structlog log level
log_format     : ``auto``, ``json`` or ``console``
service_name   : ``service.name`` field on every log event
cache_loggers  : Freeze structlog loggers on first use

Tags:
    annomap, configuration, settings, pydantic

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from annomap.errors import ConfigError


class AnnomapSettings(BaseSettings):
    """annomap configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ANNOMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Registry ─────────────────────────────────────────────────
    marker_package: str = Field(
        default="annomap.faces",
        description="Dotted module path the marker seed names are resolved under",
    )

    # ── Resolver ─────────────────────────────────────────────────
    write_back: bool = Field(default=True)
    atomic: bool = Field(default=True)
    strict: bool = Field(default=True)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["auto", "json", "console"] = Field(default="auto")
    service_name: str = Field(default="annomap")
    cache_loggers: bool = Field(default=True)

    @field_validator("marker_package")
    @classmethod
    def _check_package(cls, value: str) -> str:
        value = value.strip()
        if not value or any(not part.isidentifier() for part in value.split(".")):
            raise ValueError(f"marker_package must be a dotted module path, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return value

    @property
    def json_logs(self) -> bool | None:
        """``configure_logging`` json flag; ``None`` means auto-detect."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, AnnomapSettings] = {}


def get_settings(*, _force_reload: bool = False) -> AnnomapSettings:
    """Load, validate, and cache an :class:`AnnomapSettings` instance.

    Raises:
        ConfigError: The environment or ``.env`` holds invalid values.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = AnnomapSettings()
    except ValidationError as e:
        raise ConfigError(
            f"invalid annomap settings: {e.error_count()} error(s)", cause=e
        ).with_context(fields=[".".join(map(str, err["loc"])) for err in e.errors()]) from e
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = ["AnnomapSettings", "get_settings", "clear_settings_cache"]
