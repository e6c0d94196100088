from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_GRADES_FILE = Path(__file__).resolve().parent.parent / "data" / "grades.json"


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from school_api.db.config.Settings, which focuses on the database layer.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="School Management API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Backend API for a multi-tenant school management platform. "
            "Serves role-scoped academic, financial and operations aggregates."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Startup behavior
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(
        default=True,
        description="If true, run Alembic migrations (upgrade head) at app startup.",
    )
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, seed a demo school after migrations.",
    )

    # Sessions are issued by the external identity provider; we only verify them.
    SESSION_SECRET_KEY: str = Field(
        default="change-me",
        description="Shared secret used to verify session tokens.",
    )
    SESSION_ALGORITHM: str = Field(default="HS256")
    SESSION_COOKIE_NAME: str = Field(
        default="session-token",
        description="Cookie carrying the session token. A Bearer header is also accepted.",
    )

    # Static grade catalogue served by the attendance grades endpoint
    GRADES_FILE: Path = Field(default=_DEFAULT_GRADES_FILE)

    LOG_LEVEL: str = Field(default="INFO", description="Root log level (DEBUG, INFO, WARNING, ...)")

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is built on each call so tests can adjust the environment.
    """
    return AppSettings()
