"""Commands sent to the bot in a private message.

Replies go back to the sender. Account commands load and save players
through the World's store; DM commands name their channel as the first
argument and are gated by the dispatcher.
"""

from __future__ import annotations

from dnd_bot.commands.common import (
    STAT_COUNT,
    caller_player,
    describe,
    incorrect_format,
    is_monster_reference,
    parse_stat_values,
    require_arity,
    resolve_target,
)
from dnd_bot.commands.registry import CommandContext, CommandScope, command
from dnd_bot.commands.results import ChannelAction, CommandResult
from dnd_bot.core.exceptions import (
    InvalidInputError,
    NotFoundError,
    PasswordIncorrectError,
    StorageError,
)
from dnd_bot.core.logging import get_logger
from dnd_bot.models.monster import Monster
from dnd_bot.models.player import Player, validate_username


logger = get_logger(__name__)

PRIVATE = CommandScope.PRIVATE


# =============================================================================
# Accounts
# =============================================================================


@command(
    "register",
    scope=PRIVATE,
    usage="username password health movement str dex con wis int cha",
    description="Create a new account.",
)
def register(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 3 + STAT_COUNT)
    username, password = ctx.args[0], ctx.args[1]
    stats = parse_stat_values(ctx, ctx.args[2:])

    try:
        validate_username(username)
    except InvalidInputError as exc:
        raise ctx.fail(exc.message) from exc

    store = ctx.world.store
    if store.exists(username):
        raise ctx.fail(f"Account {username} already exists.")

    player = Player.create(username, password, **stats.model_dump())
    try:
        store.save(player)
    except StorageError as exc:
        raise ctx.fail(f"Failed to save {username}.") from exc
    logger.info("Account registered", username=username, nickname=ctx.sender)
    return ctx.whisper(f"Your account ({username}) has been created.")


@command(
    "login",
    scope=PRIVATE,
    usage="username password channel",
    description="Log in to the campaign running in a channel.",
)
def login(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 4)
    username, password, channel = ctx.args
    world = ctx.world

    if world.is_user_logged_in(ctx.sender):
        raise ctx.fail(
            "You can only be logged into one account at once.",
            "Use logout to log out.",
        )
    if world.is_account_logged_in(username):
        raise ctx.fail(f"Account {username} is already logged in.")

    try:
        player = world.store.load(username)
    except (NotFoundError, StorageError) as exc:
        raise ctx.fail(f"Account {username} does not exist, or could not be loaded.") from exc

    if not world.game_exists(channel):
        raise ctx.fail(f"Game not found on channel {channel}.")

    try:
        message = world.get_game(channel).login(player, ctx.sender, password)
    except PasswordIncorrectError as exc:
        raise ctx.fail(exc.message) from exc

    world.add_user(ctx.sender, channel, player)
    return ctx.whisper(message, actions=[ChannelAction.invite(ctx.sender, channel)])


@command("logout", scope=PRIVATE, description="Save your account and leave the campaign.")
def logout(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1)
    player = caller_player(ctx, "You're not currently logged in.")
    try:
        channel = ctx.world.remove_user(ctx.sender)
    except StorageError as exc:
        raise ctx.fail(f"Failed to save {player.username}; you are still logged in.") from exc
    return ctx.whisper(
        "You've been logged out.",
        actions=[ChannelAction.kick(channel, ctx.sender, "Logged out.")],
    )


@command("addfeat", scope=PRIVATE, usage="name of feat", description="Add a feat to your character.")
def add_feat(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, minimum=2)
    player = caller_player(ctx, "You must be logged in to add a feat.")
    name = " ".join(ctx.args)
    player.add_feat(name)
    return ctx.whisper(f"Added {name} feat.")


@command("save", scope=PRIVATE, description="Save your account.")
def save(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1)
    player = caller_player(ctx, "You must be logged in to save.")
    try:
        ctx.world.store.save(player)
    except StorageError as exc:
        raise ctx.fail(f"Failed to save {player.username}.") from exc
    return ctx.whisper(f"Saved {player.username}.")


@command("saveall", scope=PRIVATE, description="Save every logged-in account (owner only).")
def save_all(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1)
    if not ctx.is_owner(ctx.sender):
        raise ctx.fail("You must own the bot to do that!")
    report = ctx.world.save_all()
    if not report.ok:
        raise ctx.fail(*(f"Failed to save {username}." for username in report.failed))
    return ctx.whisper("The world has been saved.")


# =============================================================================
# Campaigns
# =============================================================================


@command(
    "create",
    scope=PRIVATE,
    usage="channel campaign name",
    description="Start a campaign in a channel with yourself as DM.",
)
def create(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, minimum=3)
    channel = ctx.args[0]
    title = " ".join(ctx.args[1:])
    if not title.strip():
        raise incorrect_format(ctx)

    if not ctx.settings.game.is_channel(channel):
        raise ctx.fail(f"{channel} is not a valid channel.")
    if ctx.world.game_exists(channel):
        raise ctx.fail(f"There is already a game in {channel}.")

    ctx.world.add_game(title, ctx.sender, channel)
    return ctx.whisper(
        f"Campaign created named {title}.",
        actions=[
            ChannelAction.join(channel),
            ChannelAction.topic(channel, title),
            ChannelAction.mode(channel, "+i"),
            ChannelAction.invite(ctx.sender, channel),
        ],
    )


@command("roll", scope=PRIVATE, description="Roll a d20.")
def roll(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 1)
    return ctx.whisper(f"You rolled {ctx.roller.roll_basic().total}.")


# =============================================================================
# Monsters
# =============================================================================


@command(
    "addmonster",
    scope=PRIVATE,
    usage="channel name health movement str dex con wis int cha",
    description="Create a monster in your campaign (DM only).",
    dm_only=True,
    channel_arg=1,
)
def add_monster(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 3 + STAT_COUNT)
    channel, name = ctx.args[0], ctx.args[1]
    if not name:
        raise incorrect_format(ctx)
    stats = parse_stat_values(ctx, ctx.args[2:])
    index = ctx.world.add_monster(Monster.create(name, **stats.model_dump()), channel)
    return ctx.whisper(f"Monster ({name}) has been created as @{index}.")


@command(
    "mlookup",
    scope=PRIVATE,
    usage="channel target [stat]",
    description="Look up a monster in your campaign (DM only).",
    dm_only=True,
    channel_arg=1,
)
def monster_lookup(ctx: CommandContext) -> CommandResult:
    require_arity(ctx, 3, 4)
    channel, target = ctx.args[0], ctx.args[1]
    if not is_monster_reference(target):
        raise ctx.fail(f"{target} is not a valid monster.")
    entity = resolve_target(ctx, target, channel)
    stat = ctx.args[2] if len(ctx.args) > 2 else None
    return ctx.whisper(describe(ctx, entity, target, stat))


__all__ = [
    "register",
    "login",
    "logout",
    "add_feat",
    "save",
    "save_all",
    "create",
    "roll",
    "add_monster",
    "monster_lookup",
]
