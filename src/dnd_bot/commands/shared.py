"""Commands available both privately and in channels."""

from __future__ import annotations

from dnd_bot.commands.common import describe, require_arity, resolve_target
from dnd_bot.commands.registry import CommandContext, CommandDefinition, CommandScope, command
from dnd_bot.commands.results import CommandResult


def _typed_name(ctx: CommandContext, definition: CommandDefinition) -> str:
    if definition.scope is CommandScope.CHANNEL:
        return f"{ctx.settings.game.command_prefix}{definition.name}"
    return definition.name


@command("lookup", scope=CommandScope.PRIVATE, usage="target [stat]", description="Show a player's stats.")
@command("lookup", scope=CommandScope.CHANNEL, usage="target [stat]", description="Show a target's stats.")
def lookup(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 2, 3)
    target = ctx.args[0]
    stat = ctx.args[1] if len(ctx.args) > 1 else None
    entity = resolve_target(ctx, target)
    return ctx.reply(describe(ctx, entity, target, stat))


@command("help", scope=CommandScope.PRIVATE, usage="[command]", description="List commands or describe one.")
@command("help", scope=CommandScope.CHANNEL, usage="[command]", description="List commands or describe one.")
def help_command(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1, 2)
    if ctx.args:
        name = ctx.args[0].removeprefix(ctx.settings.game.command_prefix)
        definition = ctx.registry.get(ctx.scope, name)
        if definition is None:
            raise ctx.fail(f"{ctx.args[0]} is not a valid command.")
        typed = _typed_name(ctx, definition)
        synopsis = f"{typed} {definition.usage}" if definition.usage else typed
        return ctx.reply(synopsis, definition.description)

    names = ", ".join(_typed_name(ctx, d) for d in ctx.registry.all(ctx.scope))
    return ctx.reply(
        f"Commands: {names}",
        f"Use {ctx.display_name} <command> for details.",
    )


__all__ = ["lookup", "help_command"]
