"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to localize timestamps stored without tzinfo",
    )
    admin_channel_id: str = Field(
        default="admin",
        description="Recipient identifier shared by every administrator",
        min_length=1,
    )
    admin_role_aliases: list[str] = Field(
        default_factory=lambda: ["admin", "superadmin"],
        description="Role aliases allowed to read the administrative channel",
    )
    feed_fetch_limit: int = Field(
        default=100,
        description="Maximum number of persisted notifications fetched per feed",
        gt=0,
    )
    donation_scan_limit: int = Field(
        default=100,
        description="Maximum number of donations inspected for derived feed items",
        gt=0,
    )
    mark_read_max_ids: int = Field(
        default=500,
        description="Maximum number of ids accepted by a single mark-read request",
        gt=0,
    )
    expiry_window_hours: int = Field(
        default=24,
        description="Hours before expiry during which a donation is reported as expiring",
        gt=0,
    )
    store_timeout_seconds: float = Field(
        default=5.0,
        description="Connection and checkout deadline applied to database calls",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _normalize_admin_roles(self) -> "Settings":
        aliases = [alias.strip().lower() for alias in self.admin_role_aliases if alias.strip()]
        if not aliases:
            raise ValueError("ADMIN_ROLE_ALIASES must contain at least one role alias")
        self.admin_role_aliases = aliases
        return self

    def is_admin_role(self, alias: str | None) -> bool:
        """Return ``True`` when ``alias`` grants access to the admin channel."""

        return bool(alias) and alias.strip().lower() in self.admin_role_aliases


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
