"""Configuration management with Pydantic Settings.

Settings are optional for library use: a RocketChatClient can always be
built directly from a webhook URL and a channel. They back the command
line entry point and RocketChatClient.from_settings().
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal
from urllib.parse import urlsplit

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RocketChatSettings(BaseSettings):
    """RocketChat webhook settings."""

    model_config = SettingsConfigDict(
        env_prefix="ROCKETCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    webhook_url: SecretStr = Field(
        alias="ROCKETCHAT_WEBHOOK_URL",
        description="RocketChat incoming webhook URL",
    )
    channel: str = Field(
        default="#general",
        alias="ROCKETCHAT_CHANNEL",
        description="Default channel (#channel or @user)",
    )
    timeout: float = Field(
        default=10.0,
        alias="ROCKETCHAT_TIMEOUT",
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: SecretStr) -> SecretStr:
        """Validate webhook URL format."""
        if not v.get_secret_value().startswith(("http://", "https://")):
            raise ValueError("ROCKETCHAT_WEBHOOK_URL must be an HTTP(S) URL")
        return v


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from rocketchat_webhook.config import get_settings

        settings = get_settings()
        print(settings.rocketchat.channel)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rocketchat: RocketChatSettings = Field(default_factory=RocketChatSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with the webhook token masked.
        """
        return {
            "webhook_url": self._redact_url(
                self.rocketchat.webhook_url.get_secret_value()
            ),
            "channel": self.rocketchat.channel,
            "timeout": str(self.rocketchat.timeout),
            "log_level": self.log_level,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Keep scheme and host, mask the path holding the webhook token."""
        parts = urlsplit(url)
        if parts.path.strip("/"):
            return f"{parts.scheme}://{parts.netloc}/***"
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If required environment variables are missing
            or have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
