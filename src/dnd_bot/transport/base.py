"""The chat transport contract.

The dispatcher talks to the chat network only through this protocol: it
sends (target, message) pairs and performs channel operations. Any chat
backend that implements these methods can host the bot.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChatTransport(Protocol):
    """Outbound chat operations and the owner check."""

    def send_message(self, target: str, text: str) -> None:
        """Send one line to a nickname or channel."""
        ...

    def join(self, channel: str) -> None:
        ...

    def set_topic(self, channel: str, topic: str) -> None:
        ...

    def set_mode(self, channel: str, mode: str) -> None:
        ...

    def invite(self, nickname: str, channel: str) -> None:
        ...

    def kick(self, channel: str, nickname: str, reason: str) -> None:
        ...

    def is_owner(self, identity: str) -> bool:
        """Whether an identity may run owner-only commands."""
        ...


__all__ = ["ChatTransport"]
