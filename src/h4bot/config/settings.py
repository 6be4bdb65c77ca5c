"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import LimitConstants, NicknameConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import (
    validate_discord_snowflake,
    validate_nickname_labels,
    validate_non_empty_string,
)


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    owner_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("owner_ids", "owners")
    )
    test_guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    protected_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("protected_ids", "protected")
    )
    sync_on_startup: bool = False

    @field_validator("owner_ids", "test_guild_ids", "protected_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Validate Discord snowflake IDs and convert lists to tuples."""
        # JSON arrays from env vars arrive as lists
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            validate_discord_snowflake(snowflake)
        return v


class NicknameSettings(BaseModel):
    """Batch rename configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    labels: tuple[str, ...] = Field(
        default=NicknameConstants.DEFAULT_LABELS,
        validation_alias=AliasChoices("labels", "names"),
    )
    fallback_label: str = Field(default=NicknameConstants.FALLBACK_LABEL, max_length=32)
    multiple_min_count: int = Field(default=NicknameConstants.MULTIPLE_MIN_COUNT, ge=1)
    max_concurrency: int | None = Field(default=None, ge=1)
    member_fetch_limit: int = Field(default=LimitConstants.MEMBER_FETCH_LIMIT, ge=1, le=1000)

    @field_validator("labels", mode="before")
    @classmethod
    def validate_labels(cls, v: tuple[str, ...] | list[str]) -> tuple[str, ...]:
        if isinstance(v, list):
            v = tuple(v)
        return validate_nickname_labels(v)

    @field_validator("fallback_label")
    @classmethod
    def validate_fallback_label(cls, v: str) -> str:
        return validate_non_empty_string(v, "fallback_label")


class AudioSettings(BaseModel):
    """Audio playback configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: float = Field(default=0.5, ge=0.0, le=2.0)
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5",
            "options": "-vn",
        }
    )
    ytdlp_format: str = "bestaudio/best"
    connect_timeout_seconds: float = Field(
        default=LimitConstants.VOICE_CONNECT_TIMEOUT,
        gt=0.0,
        le=60.0,
        validation_alias=AliasChoices("connect_timeout_seconds", "connect_timeout"),
    )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL, LOGGING_CONFIG_PATH (top-level)
    - DISCORD__TOKEN, DISCORD__PROTECTED_IDS, ... (nested with ``__``)
    - NICKNAMES__LABELS='["nuts", "rocks"]', NICKNAMES__MAX_CONCURRENCY=5
    - AUDIO__DEFAULT_VOLUME, AUDIO__YTDLP_FORMAT
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    logging_config_path: Path | None = None

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    nicknames: NicknameSettings = Field(default_factory=NicknameSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
