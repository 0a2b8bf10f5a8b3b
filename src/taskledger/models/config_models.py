"""Configuration models.

Defines the JSON-backed application configuration, including which storage
backend holds the task ledger.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["memory", "sqlite"] = Field(
        default="sqlite", description="Where tasks are kept"
    )
    db_path: str | None = Field(
        default=None, description="SQLite database path (sqlite backend only)"
    )

    @model_validator(mode="after")
    def check_db_path(self) -> StorageConfig:
        if self.backend == "sqlite" and self.db_path is not None and not self.db_path.strip():
            raise ValueError("db_path cannot be empty")
        return self


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    upcoming_window: int = Field(
        default=86400, ge=0, description="Default window for upcoming deadlines (seconds)"
    )


class AppConfig(BaseModel):
    """Main taskledger configuration."""

    default_owner: str = Field(
        default="local", description="Owner used when --owner is not given"
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: str = Field(default="INFO")

    @field_validator("default_owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("default_owner cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
