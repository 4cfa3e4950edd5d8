"""Application configuration settings."""

from __future__ import annotations

import json
import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_REQUIRED_SERVICE_ACCOUNT_FIELDS = ("project_id", "private_key", "client_email")


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifier.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        ...,
        description="Secret key used to verify bearer tokens",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for timestamps and daily rate-limit buckets",
    )
    firebase_service_account_key: str | None = Field(
        default=None,
        description="Firebase service account JSON used by the push channel",
    )
    firebase_app_name: str = Field(
        default="notifier-push",
        description="Name of the firebase_admin app owned by the push channel",
        min_length=1,
    )
    push_ttl_seconds: int = Field(
        default=3600,
        description="Time to live applied to Android push messages",
        gt=0,
    )
    push_android_color: str = Field(
        default="#4CAF50",
        description="Accent color of Android notifications",
    )
    default_daily_cap: int = Field(
        default=10,
        description="Daily cap applied to notification types without an explicit cap",
        gt=0,
    )
    dispatch_log_level: str = Field(
        default="INFO",
        description="Log level applied to the notifier logger hierarchy",
    )

    @model_validator(mode="after")
    def _validate_service_account(self) -> "Settings":
        if not self.firebase_service_account_key:
            return self
        try:
            account = json.loads(self.firebase_service_account_key)
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Invalid FIREBASE_SERVICE_ACCOUNT_KEY JSON format: {exc}"
            ) from exc
        if not isinstance(account, dict):
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY must be a JSON object")
        missing = [name for name in _REQUIRED_SERVICE_ACCOUNT_FIELDS if not account.get(name)]
        if missing:
            raise ValueError(
                "Invalid service account: missing required fields (%s)" % ", ".join(missing)
            )
        return self

    def firebase_service_account(self) -> dict[str, str] | None:
        """Return the parsed service account or ``None`` when not configured."""

        if not self.firebase_service_account_key:
            return None
        return json.loads(self.firebase_service_account_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the ``notifier`` logger hierarchy."""

    settings = settings or get_settings()
    level = logging.getLevelName(settings.dispatch_log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("notifier").setLevel(level)


__all__ = ["Settings", "configure_logging", "get_settings", "reset_settings_cache"]
