"""Tests for the console transport and entry point."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from dnd_bot.app import apply_arguments, build_dispatcher, parse_arguments, run_console
from dnd_bot.core.config import Settings, StorageSettings
from dnd_bot.transport.base import ChatTransport
from dnd_bot.transport.console import ConsoleTransport, parse_console_line


class TestConsoleTransport:
    """Tests for ConsoleTransport output."""

    def test_satisfies_protocol(self, settings: Settings) -> None:
        assert isinstance(ConsoleTransport(settings), ChatTransport)

    def test_output_format(self, settings: Settings) -> None:
        stream = io.StringIO()
        transport = ConsoleTransport(settings, stream)

        transport.send_message("alice", "Login successful.")
        transport.join("#keep")
        transport.set_topic("#keep", "The Sunless Keep")
        transport.set_mode("#keep", "+i")
        transport.invite("alice", "#keep")
        transport.kick("#keep", "alice", "Logged out.")

        assert stream.getvalue().splitlines() == [
            "-> alice: Login successful.",
            "** JOIN #keep",
            "** TOPIC #keep :The Sunless Keep",
            "** MODE #keep +i",
            "** INVITE alice #keep",
            "** KICK #keep alice :Logged out.",
        ]

    def test_owners_from_settings(self, settings: Settings) -> None:
        transport = ConsoleTransport(settings)
        assert transport.is_owner("owner")
        assert not transport.is_owner("alice")


class TestParseConsoleLine:
    """Tests for splitting console input."""

    def test_three_parts(self) -> None:
        assert parse_console_line("alice #keep .roll str\n") == ("alice", "#keep", ".roll str")

    @pytest.mark.parametrize("line", ["", "alice", "alice dndbot", " dndbot roll"])
    def test_too_short(self, line: str) -> None:
        assert parse_console_line(line) is None


class TestApp:
    """Tests for command line wiring."""

    def test_arguments_override_settings(self, tmp_path: Path, settings: Settings) -> None:
        args = parse_arguments(["--users-dir", str(tmp_path / "records"), "--owner", "carol", "-v"])

        updated = apply_arguments(settings, args)

        assert updated.storage.users_dir == tmp_path / "records"
        assert updated.owners == ["owner", "carol"]
        assert updated.log_level == "DEBUG"

    def test_no_arguments_keep_settings(self, settings: Settings) -> None:
        assert apply_arguments(settings, parse_arguments([])) is settings

    def test_run_console(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        settings = Settings(storage=StorageSettings(users_dir=tmp_path / "users"))
        dispatcher = build_dispatcher(settings)

        handled = run_console(
            dispatcher,
            [
                "alice dndbot register test test 20 30 12 12 12 12 12 12\n",
                "garbage\n",
                "dm dndbot create #keep Keep\n",
            ],
        )

        assert handled == 2
        output = capsys.readouterr().out
        assert "-> alice: Your account (test) has been created." in output
        assert "** JOIN #keep" in output
