"""Command outcomes: replies and channel actions with explicit recipients.

Every handler returns a CommandResult. Each reply names its own target, so
the dispatcher only has to deliver (target, message) pairs in order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from dnd_bot.core.exceptions import PropagatedError


@dataclass(frozen=True)
class Reply:
    """One chat line for one recipient."""

    target: str
    message: str


class ActionKind(StrEnum):
    """Channel operations a command can ask the transport to perform."""

    JOIN = "join"
    TOPIC = "topic"
    MODE = "mode"
    INVITE = "invite"
    KICK = "kick"


@dataclass(frozen=True)
class ChannelAction:
    """A channel operation.

    Attributes:
        kind: Which operation.
        channel: Channel it applies to.
        nickname: User invited or kicked, if any.
        text: Topic, mode flag or kick reason, if any.
    """

    kind: ActionKind
    channel: str
    nickname: str | None = None
    text: str | None = None

    @classmethod
    def join(cls, channel: str) -> ChannelAction:
        return cls(ActionKind.JOIN, channel)

    @classmethod
    def topic(cls, channel: str, topic: str) -> ChannelAction:
        return cls(ActionKind.TOPIC, channel, text=topic)

    @classmethod
    def mode(cls, channel: str, flag: str) -> ChannelAction:
        return cls(ActionKind.MODE, channel, text=flag)

    @classmethod
    def invite(cls, nickname: str, channel: str) -> ChannelAction:
        return cls(ActionKind.INVITE, channel, nickname=nickname)

    @classmethod
    def kick(cls, channel: str, nickname: str, reason: str) -> ChannelAction:
        return cls(ActionKind.KICK, channel, nickname=nickname, text=reason)


@dataclass
class CommandResult:
    """Outcome of one command.

    Attributes:
        ok: False when the command was rejected.
        replies: Chat lines to send, in order.
        actions: Channel operations to perform before the replies.
    """

    ok: bool = True
    replies: list[Reply] = field(default_factory=list)
    actions: list[ChannelAction] = field(default_factory=list)

    @classmethod
    def success(
        cls,
        target: str,
        *lines: str,
        actions: Iterable[ChannelAction] = (),
    ) -> CommandResult:
        return cls(
            ok=True,
            replies=[Reply(target, line) for line in lines],
            actions=list(actions),
        )

    @classmethod
    def failure(cls, target: str, *lines: str) -> CommandResult:
        return cls(ok=False, replies=[Reply(target, line) for line in lines])

    @classmethod
    def from_error(cls, error: PropagatedError) -> CommandResult:
        """Convert a propagated failure into replies, text untouched."""
        return cls.failure(error.target, *error.lines)

    @classmethod
    def silent(cls) -> CommandResult:
        """No reply at all (ignored channel chatter)."""
        return cls()

    def messages_for(self, target: str) -> list[str]:
        """All reply lines addressed to one target."""
        return [reply.message for reply in self.replies if reply.target == target]


__all__ = ["Reply", "ActionKind", "ChannelAction", "CommandResult"]
