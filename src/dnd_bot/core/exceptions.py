"""Custom exception hierarchy for the chat campaign bot.

All exceptions inherit from DndBotError, which carries a human-readable
message plus optional structured details for logging. Domain layers
(models, world, storage) raise the specific subclasses; command handlers
translate them into PropagatedError, the one failure type the dispatcher
knows how to route.

Example:
    >>> from dnd_bot.core.exceptions import NotFoundError
    >>> raise NotFoundError("User not found.", identifier="bob")
"""

from __future__ import annotations

from typing import Any


class DndBotError(Exception):
    """Base exception for all bot errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(DndBotError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(DndBotError):
    """Base exception for rules and world-state errors."""


class InvalidInputError(GameEngineError):
    """Raised for malformed, unparsable or out-of-range user input.

    Always user-correctable.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize input error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the argument that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class TokenizeError(InvalidInputError):
    """Raised when a chat line has an unterminated quoted token."""


class NotFoundError(GameEngineError):
    """Raised when a player, monster, game or record does not exist."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error.

        Args:
            message: Human-readable error description.
            identifier: The name or key that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if identifier is not None:
            combined_details["identifier"] = identifier
        super().__init__(message, details=combined_details)


class PasswordIncorrectError(GameEngineError):
    """Raised on a credential mismatch. Never says which part was wrong."""

    def __init__(self, message: str = "Password incorrect.") -> None:
        super().__init__(message)


class DiceRollError(GameEngineError):
    """Raised when the dice library rejects an expression."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(DndBotError):
    """Raised when a player record cannot be written or read back."""

    def __init__(
        self,
        message: str,
        *,
        username: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with record context.

        Args:
            message: Human-readable error description.
            username: The account whose record failed.
            path: The file path involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if username:
            combined_details["username"] = username
        if path:
            combined_details["path"] = path
        super().__init__(message, details=combined_details)


# =============================================================================
# Command Exceptions
# =============================================================================


class CommandError(DndBotError):
    """Base exception for command dispatch errors."""


class PropagatedError(CommandError):
    """A command failure carrying its own destination and reply text.

    Handlers raise this to abort; the dispatcher turns it into replies
    without looking at the text.

    Attributes:
        target: Nickname or channel that receives the reply.
        lines: One chat line per entry, sent in order.
    """

    def __init__(self, target: str, *lines: str) -> None:
        """Initialize the propagated failure.

        Args:
            target: Nickname or channel that receives the reply.
            *lines: Reply lines, at least one.
        """
        if not lines:
            raise ValueError("PropagatedError requires at least one line")
        self.target = target
        self.lines = list(lines)
        super().__init__(" ".join(lines), details={"target": target})


__all__ = [
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
]
