"""Tests for logging helpers."""

from __future__ import annotations

import logging

import pytest
import structlog

from dnd_bot.core.logging import add_app_context, bind_context, clear_context, resolve_level


class TestResolveLevel:
    """Tests for level name mapping."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("Error", logging.ERROR),
            ("loud", logging.INFO),
        ],
    )
    def test_names(self, name: str, expected: int) -> None:
        assert resolve_level(name) == expected


class TestContext:
    """Tests for per-line context binding."""

    def test_bind_and_clear(self) -> None:
        bind_context(sender="alice", recipient="#keep")
        assert structlog.contextvars.get_contextvars() == {
            "sender": "alice",
            "recipient": "#keep",
        }

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_app_name_added(self) -> None:
        event = add_app_context(None, "info", {"event": "Player saved"})
        assert event == {"event": "Player saved", "app": "dnd_bot"}
