"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndBotError: Base exception for all application errors.
        InvalidInputError, NotFoundError, PasswordIncorrectError,
        StorageError, PropagatedError and friends.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dnd_bot.core.config import (
    GameSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_bot.core.exceptions import (
    CommandError,
    ConfigurationError,
    DiceRollError,
    DndBotError,
    GameEngineError,
    InvalidInputError,
    NotFoundError,
    PasswordIncorrectError,
    PropagatedError,
    StorageError,
    TokenizeError,
)
from dnd_bot.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "DndBotError",
    "ConfigurationError",
    "GameEngineError",
    "InvalidInputError",
    "TokenizeError",
    "NotFoundError",
    "PasswordIncorrectError",
    "DiceRollError",
    "StorageError",
    "CommandError",
    "PropagatedError",
    # Configuration
    "Settings",
    "StorageSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
