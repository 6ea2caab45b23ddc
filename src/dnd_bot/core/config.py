"""Configuration management for the chat campaign bot.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides.

Example:
    >>> from dnd_bot.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.command_prefix
    '.'

Environment Variables:
    DND_BOT_USERS_DIR: Directory holding one JSON record per player
    DND_BOT_GAME_COMMAND_PREFIX: Prefix character for channel commands
    DND_BOT_GAME_CHANNEL_PREFIXES: Characters that mark a recipient as a channel
    DND_BOT_OWNERS: JSON list of identities allowed to run owner commands
    DND_BOT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_bot.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for player record storage.

    Attributes:
        users_dir: Directory holding one JSON file per registered player.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_BOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    users_dir: Path = Field(
        default=Path("users"),
        description="Directory for player records",
    )

    @field_validator("users_dir", mode="after")
    @classmethod
    def reject_file_path(cls, value: Path) -> Path:
        """Ensure the users directory is not an existing regular file.

        Args:
            value: The configured path.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path points at a file.
        """
        if value.exists() and not value.is_dir():
            raise ConfigurationError(
                f"users_dir ({value}) exists and is not a directory",
                config_key="users_dir",
            )
        return value


class GameSettings(BaseSettings):
    """Configuration for command parsing.

    Attributes:
        command_prefix: Character every channel command starts with.
        channel_prefixes: Characters that mark a recipient as a channel.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_BOT_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    command_prefix: str = Field(
        default=".",
        description="Prefix for channel commands",
    )
    channel_prefixes: str = Field(
        default="#&",
        description="Characters that start a channel name",
    )

    @field_validator("command_prefix", mode="after")
    @classmethod
    def single_character_prefix(cls, value: str) -> str:
        """Ensure the command prefix is one visible character.

        Raises:
            ConfigurationError: If the prefix is empty, long or whitespace.
        """
        if len(value) != 1 or value.isspace():
            raise ConfigurationError(
                f"command_prefix must be a single non-space character, got {value!r}",
                config_key="command_prefix",
            )
        return value

    @field_validator("channel_prefixes", mode="after")
    @classmethod
    def non_empty_channel_prefixes(cls, value: str) -> str:
        """Ensure at least one channel prefix is configured.

        Raises:
            ConfigurationError: If no prefix characters are given.
        """
        if not value.strip():
            raise ConfigurationError(
                "channel_prefixes must contain at least one character",
                config_key="channel_prefixes",
            )
        return value

    def is_channel(self, name: str) -> bool:
        """Check whether a recipient names a channel."""
        return bool(name) and name[0] in self.channel_prefixes


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        log_file: Optional file that also receives log records.
        owners: Identities allowed to run owner-only commands.
        storage: Player record storage settings.
        game: Command parsing settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_BOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="dnd-bot",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )
    owners: list[str] = Field(
        default_factory=list,
        description="Bot owner identities",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    def is_owner(self, identity: str) -> bool:
        """Check whether an identity is a configured bot owner."""
        return identity in self.owners


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
