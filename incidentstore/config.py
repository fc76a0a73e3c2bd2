"""
incidentstore — Configuration
Environment-sourced settings, validated once at startup.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.result import Result, fail, res

LogLevel = Literal["debug", "info", "warning", "error"]


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "incidentstore"
    app_version: str = "1.0.0"

    # Dev mode skips bearer-token auth entirely. Never enable in production.
    dev_mode: bool = Field(default=False, validation_alias=AliasChoices("dev_mode", "__DEV__"))

    # ── HTTP ─────────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = Field(default=7080, ge=1, le=65535)
    api_prefix: str = "/api/v1"

    # ── Security ─────────────────────────────────────────────────────────────
    api_token: str = ""                 # Required unless dev_mode
    expose_internal_error_details: bool = False

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: LogLevel = "info"
    log_file_path: Optional[str] = None

    # ── Database ─────────────────────────────────────────────────────────────
    # sqlite:///./incidents.db | sqlite:// (memory) | mysql+pymysql://... | postgresql://...
    database_url: str

    # Connection pool (ignored for SQLite)
    db_pool_size: int = 5             # Core persistent connections
    db_max_overflow: int = 10         # Burst connections above pool_size
    db_pool_timeout: int = 30         # Seconds to wait for a free connection
    db_pool_recycle: int = 3600       # Recycle connections to prevent stale state

    # ── Observability ────────────────────────────────────────────────────────
    enable_metrics: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "warn":
                return "warning"
        return value

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _empty_log_file_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_token_outside_dev(self) -> "Settings":
        if not self.dev_mode and not self.api_token:
            raise ValueError("API_TOKEN must be set unless dev mode is enabled")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_sqlite_memory(self) -> bool:
        url = self.database_url
        return url in ("sqlite://", "sqlite:///:memory:") or url.startswith("sqlite:///:memory:?")


def load_settings(env_file: Optional[str] = ".env") -> Result[Settings, ValidationError]:
    """Build settings from the environment without raising."""
    try:
        return res(Settings(_env_file=env_file))
    except ValidationError as e:
        return fail(e)
