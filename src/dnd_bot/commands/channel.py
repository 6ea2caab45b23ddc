"""Prefixed commands typed in a campaign channel.

Replies go to the channel. Monster forms (``@N``) address the channel's own
monsters and require the caller to be that channel's DM.
"""

from __future__ import annotations

from dnd_bot.commands.common import (
    STAT_COUNT,
    caller_player,
    incorrect_format,
    is_monster_reference,
    parse_amount,
    parse_coordinate,
    parse_stat_values,
    require_arity,
    require_dm,
    resolve_target,
)
from dnd_bot.commands.registry import CommandContext, CommandScope, command
from dnd_bot.commands.results import CommandResult
from dnd_bot.engine.dice import VALID_ROLL_OPTIONS, RollType
from dnd_bot.models.position import Position
from dnd_bot.models.stats import resolve_stat


CHANNEL = CommandScope.CHANNEL


def _split_monster(ctx: CommandContext) -> tuple[str, list[str]]:
    """Split an optional leading ``@N`` off the arguments.

    Returns:
        The acting identifier (the monster, else the caller) and the rest.
    """
    args = ctx.args
    if args and is_monster_reference(args[0]):
        require_dm(ctx, ctx.recipient)
        return args[0], args[1:]
    return ctx.sender, args


# =============================================================================
# Rolls and movement
# =============================================================================


@command(
    "roll",
    scope=CHANNEL,
    usage="[@monster] [stat]",
    description="Roll a d20, optionally with an ability bonus.",
)
def roll(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1, 2, 3)
    identifier, rest = _split_monster(ctx)
    if len(rest) > 1:
        raise incorrect_format(ctx)
    entity = resolve_target(ctx, identifier)

    roll_type = RollType.BASIC if not rest else RollType.parse(rest[0])
    if roll_type is None:
        raise ctx.fail(
            f"{rest[0]} is not a valid stat.",
            f"Options: {VALID_ROLL_OPTIONS} (or their full names).",
        )
    total = entity.roll(roll_type, ctx.roller)
    return ctx.reply(f"{entity.identifier} rolled {total}.")


@command("move", scope=CHANNEL, usage="[@monster] x y", description="Move within your movement range.")
def move(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 3, 4)
    identifier, rest = _split_monster(ctx)
    if len(rest) != 2:
        raise incorrect_format(ctx)
    entity = resolve_target(ctx, identifier)

    target = Position(x=parse_coordinate(ctx, rest[0]), y=parse_coordinate(ctx, rest[1]))
    outcome = entity.attempt_move(target)
    if not outcome.moved:
        raise ctx.fail(outcome.message)
    return ctx.reply(f"{entity.identifier} moved to {outcome.position}.")


# =============================================================================
# Stat changes
# =============================================================================


def _adjust_stat(ctx: CommandContext, *, increase: bool) -> CommandResult:
    require_arity(ctx, 3)
    name, amount_text = ctx.args
    player = caller_player(ctx, "You're not logged in.")
    if resolve_stat(name) is None:
        raise ctx.fail(f"{name} is not a valid stat.")
    amount = parse_amount(ctx, amount_text)

    if increase:
        player.stats.increase_stat(name, amount)
    else:
        player.stats.update_stat(name, amount)
    value = player.stats.get_stat(name)
    return ctx.reply(f"{player.username} ({ctx.sender}) now has {value} {name}.")


@command("update", scope=CHANNEL, usage="stat value", description="Set one of your base stats.")
def update(ctx: CommandContext) -> CommandResult:
    return _adjust_stat(ctx, increase=False)


@command("increase", scope=CHANNEL, usage="stat value", description="Raise one of your base stats.")
def increase(ctx: CommandContext) -> CommandResult:
    return _adjust_stat(ctx, increase=True)


@command(
    "temp",
    scope=CHANNEL,
    usage="target health movement str dex con wis int cha",
    description="Give a target temporary stats (DM only).",
    dm_only=True,
)
def temp(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 2 + STAT_COUNT)
    target = ctx.args[0]
    stats = parse_stat_values(ctx, ctx.args[1:])
    entity = resolve_target(ctx, target)
    entity.set_temp_stats(stats)
    return ctx.reply(f"{entity.identifier} ({target}) now has temporary {stats}.")


@command(
    "cleartemp",
    scope=CHANNEL,
    usage="target",
    description="Revert a target to its base stats (DM only).",
    dm_only=True,
)
def clear_temp(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 2)
    target = ctx.args[0]
    entity = resolve_target(ctx, target)
    entity.clear_temp_stats()
    return ctx.reply(f"{entity.identifier} ({target}) has reverted to {entity.effective_stats()}.")


@command(
    "damage",
    scope=CHANNEL,
    usage="target value",
    description="Damage a target (DM only).",
    dm_only=True,
)
def damage(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 3)
    target, amount_text = ctx.args
    entity = resolve_target(ctx, target)
    amount = parse_amount(ctx, amount_text)

    if entity.damage(amount):
        health = entity.effective_stats().health
        return ctx.reply(
            f"{entity.identifier} ({target}) took {amount} damage and has {health} health remaining."
        )
    return ctx.reply(f"{entity.identifier} ({target}) has fallen unconscious.")


__all__ = ["roll", "move", "update", "increase", "temp", "clear_temp", "damage"]
