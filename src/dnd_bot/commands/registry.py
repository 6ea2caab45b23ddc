"""Command registry and per-invocation context.

Handlers are plain functions taking a CommandContext and returning a
CommandResult. They are registered with the ``command`` decorator into one
of two tables: private messages and channel messages. The same function
can be registered in both.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from dnd_bot.commands.results import ChannelAction, CommandResult
from dnd_bot.core.config import Settings
from dnd_bot.core.exceptions import PropagatedError
from dnd_bot.core.logging import get_logger
from dnd_bot.engine.dice import DiceRoller
from dnd_bot.engine.world import World


logger = get_logger(__name__)

Handler = Callable[["CommandContext"], CommandResult]
H = TypeVar("H", bound=Handler)


# =============================================================================
# Command Definitions
# =============================================================================


class CommandScope(StrEnum):
    """Where a command may be invoked."""

    PRIVATE = "private"
    CHANNEL = "channel"


@dataclass
class CommandDefinition:
    """A registered command.

    Attributes:
        name: Command word without any prefix.
        scope: Private or channel table.
        usage: Argument synopsis shown in format errors.
        description: One line shown by help.
        handler: Function executing the command.
        dm_only: Caller must be the DM of the addressed channel.
        channel_arg: Token index naming the channel for private DM-only
            commands. Channel commands address their own channel.
    """

    name: str
    scope: CommandScope
    usage: str
    description: str
    handler: Handler
    dm_only: bool = False
    channel_arg: int | None = None


class CommandRegistry:
    """Private and channel command tables."""

    def __init__(self) -> None:
        self._tables: dict[CommandScope, dict[str, CommandDefinition]] = {
            scope: {} for scope in CommandScope
        }

    def register(self, definition: CommandDefinition) -> None:
        """Add a definition, replacing any with the same scope and name."""
        self._tables[definition.scope][definition.name] = definition
        logger.debug("Command registered", name=definition.name, scope=definition.scope.value)

    def get(self, scope: CommandScope, name: str) -> CommandDefinition | None:
        return self._tables[scope].get(name.lower())

    def all(self, scope: CommandScope) -> list[CommandDefinition]:
        """Definitions of a scope in registration order."""
        return list(self._tables[scope].values())

    def command(
        self,
        name: str,
        *,
        scope: CommandScope,
        usage: str = "",
        description: str,
        dm_only: bool = False,
        channel_arg: int | None = None,
    ) -> Callable[[H], H]:
        """Decorator registering a function as a command handler.

        Args:
            name: Command word.
            scope: Table to register into.
            usage: Argument synopsis.
            description: Help text.
            dm_only: Gate the command on the channel's DM.
            channel_arg: Token index of the channel for private DM-only commands.

        Returns:
            Decorator returning the function unchanged.
        """

        def decorator(func: H) -> H:
            self.register(
                CommandDefinition(
                    name=name,
                    scope=scope,
                    usage=usage,
                    description=description,
                    handler=func,
                    dm_only=dm_only,
                    channel_arg=channel_arg,
                )
            )
            return func

        return decorator


# Global command registry
registry = CommandRegistry()
command = registry.command


# =============================================================================
# Invocation Context
# =============================================================================


@dataclass
class CommandContext:
    """Everything a handler needs for one invocation.

    Attributes:
        world: Shared game state.
        settings: Application settings.
        sender: Nickname that sent the line.
        recipient: Channel or the bot's own nickname.
        tokens: Tokenized line; ``tokens[0]`` is the command word as typed.
        definition: The command being run.
        roller: Dice source.
        is_owner: Owner check supplied by the transport.
        registry: Table the command was found in, for help.
    """

    world: World
    settings: Settings
    sender: str
    recipient: str
    tokens: list[str]
    definition: CommandDefinition
    roller: DiceRoller
    is_owner: Callable[[str], bool]
    registry: CommandRegistry = field(default_factory=lambda: registry)

    @property
    def scope(self) -> CommandScope:
        return self.definition.scope

    @property
    def channel(self) -> str | None:
        """The channel addressed, or None for private messages."""
        if self.scope is CommandScope.CHANNEL:
            return self.recipient
        return None

    @property
    def reply_target(self) -> str:
        """Channel for channel commands, the sender otherwise."""
        return self.channel or self.sender

    @property
    def args(self) -> list[str]:
        return self.tokens[1:]

    @property
    def display_name(self) -> str:
        """Command word as users type it."""
        if self.scope is CommandScope.CHANNEL:
            return f"{self.settings.game.command_prefix}{self.definition.name}"
        return self.definition.name

    def reply(self, *lines: str, actions: list[ChannelAction] | None = None) -> CommandResult:
        """Successful result addressed to the reply target."""
        return CommandResult.success(self.reply_target, *lines, actions=actions or ())

    def whisper(self, *lines: str, actions: list[ChannelAction] | None = None) -> CommandResult:
        """Successful result addressed privately to the sender."""
        return CommandResult.success(self.sender, *lines, actions=actions or ())

    def fail(self, *lines: str, target: str | None = None) -> PropagatedError:
        """Build a failure for the reply target (or ``target``) to raise."""
        return PropagatedError(target or self.reply_target, *lines)


__all__ = [
    "CommandScope",
    "CommandDefinition",
    "CommandRegistry",
    "CommandContext",
    "Handler",
    "registry",
    "command",
]
