"""Configuration models for Pathly CLI.

The configuration file is a single JSON document validated by ``AppConfig``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .core import TimePeriod


class StorageConfig(BaseModel):
    """Document store configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite vault path (defaults to user data dir)"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class GoalDefaults(BaseModel):
    """Defaults applied when a goal is created without explicit values."""

    default_points: int = Field(default=10, ge=0)
    default_period: TimePeriod = Field(default=TimePeriod.ONGOING)


class AppConfig(BaseModel):
    """Main Pathly configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    goals: GoalDefaults = Field(default_factory=GoalDefaults)
