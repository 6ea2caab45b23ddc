"""dnd-bot - Chat-driven tabletop campaign bot.

Players register accounts and log in to campaigns hosted in chat channels.
A campaign's DM creates monsters and adjusts stats; everyone rolls dice and
moves on a grid through short text commands.

Example:
    >>> from dnd_bot import CommandDispatcher, ConsoleTransport, PlayerStore, World
    >>> from dnd_bot import get_settings
    >>>
    >>> settings = get_settings()
    >>> world = World(PlayerStore(settings.storage.users_dir))
    >>> bot = CommandDispatcher(world, ConsoleTransport(settings), settings=settings)
    >>> bot.handle("alice", "dndbot", "roll")

Modules:
    core: Configuration, logging, and base exceptions.
    models: Stats, positions, players, monsters and games.
    engine: Dice and the shared World.
    storage: JSON player records.
    commands: Tokenizer, command handlers and dispatcher.
    transport: Chat transport protocol and console transport.
"""

from __future__ import annotations

# Core
from dnd_bot.core.config import Settings, get_settings
from dnd_bot.core.exceptions import DndBotError, PropagatedError
from dnd_bot.core.logging import configure_logging, get_logger

# Models
from dnd_bot.models import Game, Monster, Player, Position, Stats

# Engine
from dnd_bot.engine import DiceRoller, RollType, World

# Storage
from dnd_bot.storage import PlayerStore

# Commands
from dnd_bot.commands import CommandDispatcher, CommandResult, Reply

# Transport
from dnd_bot.transport import ChatTransport, ConsoleTransport


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndBotError",
    "PropagatedError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Stats",
    "Position",
    "Player",
    "Monster",
    "Game",
    # Engine
    "DiceRoller",
    "RollType",
    "World",
    # Storage
    "PlayerStore",
    # Commands
    "CommandDispatcher",
    "CommandResult",
    "Reply",
    # Transport
    "ChatTransport",
    "ConsoleTransport",
]
