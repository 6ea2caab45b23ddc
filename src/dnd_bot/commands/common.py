"""Argument parsing, target resolution and permission helpers for handlers.

Every helper either returns a value or raises PropagatedError with the
exact reply text, so handlers read as a straight line of checks.
"""

from __future__ import annotations

from dnd_bot.commands.registry import CommandContext
from dnd_bot.core.constants import STAT_MAX
from dnd_bot.core.exceptions import GameEngineError, PropagatedError
from dnd_bot.engine.world import MONSTER_SIGIL
from dnd_bot.models.entity import Entity
from dnd_bot.models.game import Game
from dnd_bot.models.player import Player
from dnd_bot.models.stats import Stats


STAT_COUNT = 8
FEAT_KEYS = frozenset({"feat", "feats"})
POSITION_KEYS = frozenset({"pos", "position"})


# =============================================================================
# Formatting
# =============================================================================


def usage_line(ctx: CommandContext) -> str:
    """``<cmd> <args>`` as shown after format errors."""
    usage = ctx.definition.usage
    return f"{ctx.display_name} {usage}" if usage else ctx.display_name


def incorrect_format(ctx: CommandContext) -> PropagatedError:
    return ctx.fail(
        f"Incorrect format for {ctx.display_name}. Format is:",
        usage_line(ctx),
    )


def require_arity(ctx: CommandContext, *counts: int, minimum: int | None = None) -> None:
    """Check the token count, raising a format error otherwise.

    Args:
        ctx: Invocation context.
        *counts: Accepted exact token counts, command word included.
        minimum: Accept any count at or above this instead.
    """
    size = len(ctx.tokens)
    if minimum is not None and size >= minimum:
        return
    if size not in counts:
        raise incorrect_format(ctx)


# =============================================================================
# Numbers
# =============================================================================


def parse_stat_values(ctx: CommandContext, values: list[str]) -> Stats:
    """Parse the eight stat arguments, each in 1..255.

    Raises:
        PropagatedError: "Stats must be non-zero positive integers." plus usage.
    """
    parsed: list[int] = []
    for text in values:
        number = int(text) if text.isdecimal() else 0
        if not 0 < number <= STAT_MAX:
            raise ctx.fail(
                "Stats must be non-zero positive integers. Format is:",
                usage_line(ctx),
            )
        parsed.append(number)
    return Stats.from_values(*parsed)


def parse_amount(ctx: CommandContext, text: str) -> int:
    """Parse a stat-sized amount in 0..255."""
    if not text.isdecimal() or int(text) > STAT_MAX:
        raise ctx.fail(f"{text} is not a valid positive integer.")
    return int(text)


def parse_coordinate(ctx: CommandContext, text: str) -> int:
    """Parse a signed grid coordinate."""
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits.isdecimal():
        raise ctx.fail(f"{text} is not a valid integer.")
    return int(text)


# =============================================================================
# Targets and permissions
# =============================================================================


def missing_target(identifier: str) -> str:
    if identifier.startswith(MONSTER_SIGIL):
        return f"{identifier} is not a valid monster."
    return f"{identifier} is not logged in."


def resolve_target(ctx: CommandContext, identifier: str, channel: str | None = None) -> Entity:
    """Resolve a nickname or ``@N`` monster reference.

    Args:
        ctx: Invocation context.
        identifier: Target as typed.
        channel: Channel whose monsters ``@N`` refers to; defaults to the
            context's channel.

    Raises:
        PropagatedError: If the target does not resolve.
    """
    try:
        return ctx.world.get_entity(identifier, channel or ctx.channel)
    except GameEngineError as exc:
        raise ctx.fail(missing_target(identifier)) from exc


def caller_player(ctx: CommandContext, message: str) -> Player:
    """The sender's logged-in player, or fail with ``message``."""
    if not ctx.world.is_user_logged_in(ctx.sender):
        raise ctx.fail(message)
    return ctx.world.get_user(ctx.sender)


def require_dm(ctx: CommandContext, channel: str) -> Game:
    """Check that a game runs in ``channel`` and the sender is its DM.

    Rejections go privately to the sender.
    """
    if not ctx.world.game_exists(channel):
        raise ctx.fail(f"There is no game in {channel}.", target=ctx.sender)
    game = ctx.world.get_game(channel)
    if not game.is_dm(ctx.sender):
        raise ctx.fail("You must be the DM to do that!", target=ctx.sender)
    return game


def is_monster_reference(token: str) -> bool:
    return token.startswith(MONSTER_SIGIL)


# =============================================================================
# Lookups
# =============================================================================


def describe(ctx: CommandContext, entity: Entity, target: str, stat: str | None) -> str:
    """Render a lookup reply for an entity.

    Args:
        ctx: Invocation context.
        entity: Resolved target.
        target: Target as typed.
        stat: Optional stat or pseudo-stat name.

    Raises:
        PropagatedError: If ``stat`` is not a valid stat for the entity.
    """
    label = f"{entity.identifier} ({target}):"
    temp = "Temp. " if entity.has_temp_stats() else ""
    stats = entity.effective_stats()

    if stat is None:
        line = f"{label} {temp}{stats}"
        if isinstance(entity, Player):
            line = f"{line} Feats: {entity.feats_display()}"
        return line

    key = stat.lower()
    if key in FEAT_KEYS and isinstance(entity, Player):
        return f"{label} Feats: {entity.feats_display()}"
    if key in POSITION_KEYS:
        return f"{label} Position {entity.position}"
    value = stats.get_stat(stat)
    if value is None:
        raise ctx.fail(f"{stat} is not a valid stat.")
    return f"{label} {temp}{value} {stat}"


__all__ = [
    "STAT_COUNT",
    "usage_line",
    "incorrect_format",
    "require_arity",
    "parse_stat_values",
    "parse_amount",
    "parse_coordinate",
    "missing_target",
    "resolve_target",
    "caller_player",
    "require_dm",
    "is_monster_reference",
    "describe",
]
