"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestDndBotError:
    """Tests for the base DndBotError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = DndBotError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = DndBotError("Test error", details={"key": "value", "count": 42})
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(DndBotError("Test", details={"x": 1}))
        assert "DndBotError" in repr_str
        assert "Test" in repr_str


class TestDomainExceptions:
    """Tests for domain exception context."""

    def test_configuration_error_key(self) -> None:
        exc = ConfigurationError("Bad value", config_key="owners")
        assert exc.details["config_key"] == "owners"

    def test_invalid_input_context(self) -> None:
        exc = InvalidInputError("Bad stat", field_name="stat", invalid_value="foo")
        assert exc.details == {"field_name": "stat", "invalid_value": "foo"}

    def test_not_found_identifier(self) -> None:
        exc = NotFoundError("No such monster.", identifier="@3")
        assert exc.details["identifier"] == "@3"

    def test_password_incorrect_default_message(self) -> None:
        assert PasswordIncorrectError().message == "Password incorrect."

    def test_storage_error_context(self) -> None:
        exc = StorageError("Write failed", username="test", path="users/test.json")
        assert exc.details == {"username": "test", "path": "users/test.json"}

    def test_dice_roll_error_expression(self) -> None:
        exc = DiceRollError("Invalid", expression="1d")
        assert exc.details["expression"] == "1d"


class TestPropagatedError:
    """Tests for PropagatedError."""

    def test_carries_target_and_lines(self) -> None:
        """Test that target and lines are kept verbatim."""
        exc = PropagatedError("alice", "Incorrect format for login. Format is:", "login a b c")

        assert exc.target == "alice"
        assert exc.lines == ["Incorrect format for login. Format is:", "login a b c"]

    def test_requires_a_line(self) -> None:
        """Test that an empty failure is refused."""
        with pytest.raises(ValueError):
            PropagatedError("alice")


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        ("exc_class", "parent"),
        [
            (ConfigurationError, DndBotError),
            (GameEngineError, DndBotError),
            (InvalidInputError, GameEngineError),
            (TokenizeError, InvalidInputError),
            (NotFoundError, GameEngineError),
            (PasswordIncorrectError, GameEngineError),
            (DiceRollError, GameEngineError),
            (StorageError, DndBotError),
            (CommandError, DndBotError),
            (PropagatedError, CommandError),
        ],
    )
    def test_inheritance(self, exc_class: type, parent: type) -> None:
        assert issubclass(exc_class, parent)
