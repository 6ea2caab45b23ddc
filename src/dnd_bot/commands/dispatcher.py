"""Route chat lines to command handlers and deliver their results.

For each incoming line the dispatcher:

1. tokenizes it,
2. picks the private or channel table from the recipient,
3. applies the DM permission gate,
4. runs the handler,
5. converts any PropagatedError into replies.

``process`` does all of that without touching the network; ``handle``
additionally delivers the result through the transport.
"""

from __future__ import annotations

from dnd_bot.commands import channel as _channel_commands  # noqa: F401  (registers handlers)
from dnd_bot.commands import private as _private_commands  # noqa: F401
from dnd_bot.commands import shared as _shared_commands  # noqa: F401
from dnd_bot.commands.common import require_dm
from dnd_bot.commands.registry import (
    CommandContext,
    CommandDefinition,
    CommandRegistry,
    CommandScope,
    registry as default_registry,
)
from dnd_bot.commands.results import ActionKind, ChannelAction, CommandResult
from dnd_bot.commands.tokenizer import tokenize
from dnd_bot.core.config import Settings, get_settings
from dnd_bot.core.exceptions import DndBotError, PropagatedError, TokenizeError
from dnd_bot.core.logging import bind_context, clear_context, get_logger
from dnd_bot.engine.dice import DiceRoller, get_default_roller
from dnd_bot.engine.world import World
from dnd_bot.transport.base import ChatTransport


logger = get_logger(__name__)

MALFORMED_INPUT = "Malformed input: unterminated quote."


class CommandDispatcher:
    """Turns incoming chat lines into replies and channel actions."""

    def __init__(
        self,
        world: World,
        transport: ChatTransport,
        *,
        settings: Settings | None = None,
        registry: CommandRegistry | None = None,
        roller: DiceRoller | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            world: Shared game state.
            transport: Chat backend for delivery and owner checks.
            settings: Application settings; loaded if omitted.
            registry: Command tables; the global registry if omitted.
            roller: Dice source; the shared roller if omitted.
        """
        self.world = world
        self.transport = transport
        self.settings = settings or get_settings()
        self.registry = registry or default_registry
        self.roller = roller or get_default_roller()

    # =========================================================================
    # Routing
    # =========================================================================

    def process(self, sender: str, recipient: str, line: str) -> CommandResult:
        """Run one chat line and return its outcome without delivering it.

        Args:
            sender: Nickname that sent the line.
            recipient: Channel, or the bot's nickname for private messages.
            line: Message text.

        Returns:
            The result; empty for ignored channel chatter.
        """
        bind_context(sender=sender, recipient=recipient)
        try:
            return self._process(sender, recipient, line)
        finally:
            clear_context()

    def _process(self, sender: str, recipient: str, line: str) -> CommandResult:
        in_channel = self.settings.game.is_channel(recipient)
        prefix = self.settings.game.command_prefix

        try:
            tokens = tokenize(line)
        except TokenizeError:
            if in_channel and not line.startswith(prefix):
                return CommandResult.silent()
            logger.info("Malformed command line")
            return CommandResult.failure(sender, MALFORMED_INPUT)

        if not tokens:
            return CommandResult.silent()

        word = tokens[0]
        if in_channel:
            if not word.startswith(prefix):
                return CommandResult.silent()
            definition = self.registry.get(CommandScope.CHANNEL, word[len(prefix):])
            if definition is None:
                return CommandResult.silent()
        else:
            definition = self.registry.get(CommandScope.PRIVATE, word)
            if definition is None:
                return CommandResult.failure(sender, f"{word} is not a valid command.")

        ctx = CommandContext(
            world=self.world,
            settings=self.settings,
            sender=sender,
            recipient=recipient,
            tokens=tokens,
            definition=definition,
            roller=self.roller,
            is_owner=self.transport.is_owner,
            registry=self.registry,
        )
        return self.execute(definition, ctx)

    def execute(self, definition: CommandDefinition, ctx: CommandContext) -> CommandResult:
        """Gate and run a resolved command, converting failures to replies."""
        logger.debug("Running command", command=definition.name, scope=definition.scope.value)
        try:
            if definition.dm_only:
                self._check_dm(definition, ctx)
            return definition.handler(ctx)
        except PropagatedError as exc:
            logger.info("Command rejected", command=definition.name, reply_to=exc.target)
            return CommandResult.from_error(exc)
        except DndBotError as exc:
            logger.exception("Command failed", command=definition.name, error=exc.message)
            return CommandResult.failure(ctx.sender, f"{ctx.display_name} failed: {exc.message}")

    def _check_dm(self, definition: CommandDefinition, ctx: CommandContext) -> None:
        if definition.scope is CommandScope.CHANNEL:
            require_dm(ctx, ctx.recipient)
        elif definition.channel_arg is not None and len(ctx.tokens) > definition.channel_arg:
            require_dm(ctx, ctx.tokens[definition.channel_arg])

    # =========================================================================
    # Delivery
    # =========================================================================

    def handle(self, sender: str, recipient: str, line: str) -> CommandResult:
        """Process a line and deliver the result through the transport."""
        result = self.process(sender, recipient, line)
        self.deliver(result)
        return result

    def deliver(self, result: CommandResult) -> None:
        """Perform channel actions, then send replies, in order."""
        for action in result.actions:
            self._perform(action)
        for reply in result.replies:
            self.transport.send_message(reply.target, reply.message)

    def _perform(self, action: ChannelAction) -> None:
        transport = self.transport
        match action.kind:
            case ActionKind.JOIN:
                transport.join(action.channel)
            case ActionKind.TOPIC:
                transport.set_topic(action.channel, action.text or "")
            case ActionKind.MODE:
                transport.set_mode(action.channel, action.text or "")
            case ActionKind.INVITE:
                transport.invite(action.nickname or "", action.channel)
            case ActionKind.KICK:
                transport.kick(action.channel, action.nickname or "", action.text or "")


__all__ = ["CommandDispatcher", "MALFORMED_INPUT"]
