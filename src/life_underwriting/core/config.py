# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from decimal import Decimal

from beartype import beartype
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnderwritingSettings(BaseSettings):
    """Engine settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="UNDERWRITING_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,
        validate_default=True,
        extra="forbid",
    )

    # Premium
    base_premium_rate: Decimal = Field(
        default=Decimal("0.001"),
        gt=Decimal("0"),
        le=Decimal("1"),
        description="Premium per unit of coverage ($1 per $1000)",
    )
    minimum_premium: Decimal = Field(
        default=Decimal("100"),
        ge=Decimal("0"),
        description="Premium floor applied before rounding",
    )

    # Observability
    slow_evaluation_ms: float = Field(
        default=50.0,
        gt=0,
        le=60000,
        description="Evaluations slower than this are logged as warnings",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the underwriting loggers",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["UnderwritingSettings"], v: str) -> str:
        """Accept only standard logging level names."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


_settings: UnderwritingSettings | None = None


@beartype
def get_settings() -> UnderwritingSettings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = UnderwritingSettings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
