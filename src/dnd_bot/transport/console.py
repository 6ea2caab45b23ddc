"""A transport that writes chat traffic to a text stream.

Used by ``python -m dnd_bot`` to drive the bot from a terminal, one
``<sender> <recipient> <text>`` line at a time.
"""

from __future__ import annotations

import sys
from typing import TextIO

from dnd_bot.core.config import Settings
from dnd_bot.core.logging import get_logger


logger = get_logger(__name__)


class ConsoleTransport:
    """Print outgoing messages and channel operations."""

    def __init__(self, settings: Settings, stream: TextIO | None = None) -> None:
        """Initialize the console transport.

        Args:
            settings: Supplies the owner identities.
            stream: Output stream; stdout if omitted.
        """
        self.settings = settings
        self.stream = stream or sys.stdout

    def _emit(self, line: str) -> None:
        print(line, file=self.stream, flush=True)

    def send_message(self, target: str, text: str) -> None:
        self._emit(f"-> {target}: {text}")

    def join(self, channel: str) -> None:
        self._emit(f"** JOIN {channel}")

    def set_topic(self, channel: str, topic: str) -> None:
        self._emit(f"** TOPIC {channel} :{topic}")

    def set_mode(self, channel: str, mode: str) -> None:
        self._emit(f"** MODE {channel} {mode}")

    def invite(self, nickname: str, channel: str) -> None:
        self._emit(f"** INVITE {nickname} {channel}")

    def kick(self, channel: str, nickname: str, reason: str) -> None:
        self._emit(f"** KICK {channel} {nickname} :{reason}")

    def is_owner(self, identity: str) -> bool:
        return self.settings.is_owner(identity)


def parse_console_line(line: str) -> tuple[str, str, str] | None:
    """Split ``<sender> <recipient> <text>``.

    Returns:
        The three parts, or None if the line has fewer than three.
    """
    parts = line.rstrip("\r\n").split(" ", 2)
    if len(parts) < 3 or not parts[0] or not parts[1]:
        logger.debug("Console line ignored", line=line)
        return None
    return parts[0], parts[1], parts[2]


__all__ = ["ConsoleTransport", "parse_console_line"]
