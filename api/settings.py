"""
Application settings using pydantic-settings for type-safe configuration.

All environment variables are centralized here with proper typing, validation,
and sensible defaults. Settings are loaded once at startup and cached.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _is_docker_environment() -> bool:
    """Detect if running inside a Docker container."""
    if Path("/.dockerenv").exists():
        return True
    try:
        with open("/proc/1/cgroup") as f:
            return "docker" in f.read()
    except (FileNotFoundError, PermissionError):
        pass
    return False


def _is_github_actions() -> bool:
    """Detect if running in GitHub Actions CI.

    Requires BOTH CI=true AND GITHUB_ACTIONS=true.
    """
    return os.getenv("CI") == "true" and os.getenv("GITHUB_ACTIONS") == "true"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults for local development.
    Production values should be set via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Authentication ===
    auth_mode: str = Field(
        default="production",
        description="Authentication mode: 'production' (PocketBase token validation) or 'bypass' (dev only)",
    )
    skip_pb_auth: bool = Field(
        default=False,
        description="Skip PocketBase admin authentication on startup (for testing)",
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="http://127.0.0.1:8090",
        description="PocketBase server URL",
    )
    pocketbase_admin_email: str = Field(
        default="admin@lifeline.local",
        description="PocketBase admin email for API authentication",
    )
    pocketbase_admin_password: str = Field(
        default="",
        description="PocketBase admin password (required - no default for security)",
    )

    @field_validator("pocketbase_admin_password", mode="after")
    @classmethod
    def validate_admin_password(cls, v: str) -> str:
        """Warn when the admin password is unset or an obvious default."""
        insecure_defaults = {"password", "admin", "123456", "lifeline", ""}
        if v in insecure_defaults:
            logger.warning(
                "SECURITY WARNING: POCKETBASE_ADMIN_PASSWORD is not set or uses an insecure default. "
                "Set a strong password in your .env file for production use."
            )
        return v

    # === CORS Configuration ===
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    # === Docker Detection ===
    is_docker: bool = Field(
        default=False,
        description="Whether running in Docker container",
    )

    # === Chat Assistant ===
    typing_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Delay before each bot reply while the typing indicator shows",
    )
    redirect_delay_seconds: float = Field(
        default=3.5,
        ge=0,
        description="Delay between a reply and the redirect it requests",
    )
    chat_session_ttl_seconds: int = Field(
        default=1800,
        gt=0,
        description="Idle time after which a chat session is discarded",
    )
    chat_max_sessions: int = Field(
        default=500,
        gt=0,
        description="Maximum number of live chat sessions held in memory",
    )

    # === Camps ===
    camp_retention_days: int = Field(
        default=180,
        ge=0,
        description="Camps dated more than this many days ago are deleted on listing load",
    )

    # === System Settings ===
    tz: str = Field(
        default="Asia/Kolkata",
        description="Timezone used to decide which camps are upcoming",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins string into list."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    @field_validator("is_docker", mode="before")
    @classmethod
    def parse_is_docker(cls, v: str | bool) -> bool:
        """Parse IS_DOCKER env var which can be 'true', '1', 'yes', etc."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes")
        return False

    @field_validator("auth_mode", mode="after")
    @classmethod
    def validate_auth_mode(cls, v: str) -> str:
        """Validate and normalize auth_mode."""
        v = v.lower()
        if v not in ("bypass", "production"):
            raise ValueError(f"Invalid AUTH_MODE: {v}. Must be 'bypass' or 'production'")
        return v

    def is_docker_environment(self) -> bool:
        return self.is_docker or _is_docker_environment()

    def get_effective_auth_mode(self) -> str:
        """Get effective auth mode, forcing production in Docker (except CI)."""
        if self.is_docker_environment() and not _is_github_actions():
            return "production"
        return self.auth_mode


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.
    """
    return Settings()
