"""Command layer: tokenizer, registry, handlers and dispatcher.

Submodules:
    tokenizer: Quote-aware splitting of chat lines
    results: Replies and channel actions returned by handlers
    registry: Command tables and per-invocation context
    common: Parsing, target and permission helpers
    private: Private-message commands
    channel: Prefixed channel commands
    shared: Commands available in both contexts
    dispatcher: Routing, permission gate and delivery
"""

from __future__ import annotations

# =============================================================================
# Results
# =============================================================================
from dnd_bot.commands.results import ActionKind, ChannelAction, CommandResult, Reply

# =============================================================================
# Registry
# =============================================================================
from dnd_bot.commands.registry import (
    CommandContext,
    CommandDefinition,
    CommandRegistry,
    CommandScope,
    command,
    registry,
)

# =============================================================================
# Parsing and dispatch
# =============================================================================
from dnd_bot.commands.tokenizer import tokenize
from dnd_bot.commands.dispatcher import MALFORMED_INPUT, CommandDispatcher


__all__ = [
    # Results
    "Reply",
    "ActionKind",
    "ChannelAction",
    "CommandResult",
    # Registry
    "CommandScope",
    "CommandDefinition",
    "CommandRegistry",
    "CommandContext",
    "command",
    "registry",
    # Parsing and dispatch
    "tokenize",
    "CommandDispatcher",
    "MALFORMED_INPUT",
]
