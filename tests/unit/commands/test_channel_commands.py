"""Tests for prefixed channel commands."""

from __future__ import annotations

import re

import pytest

from dnd_bot.commands.dispatcher import CommandDispatcher
from dnd_bot.commands.results import Reply
from dnd_bot.engine.dice import DiceRoller
from dnd_bot.engine.world import World
from dnd_bot.models.position import Position


CHANNEL = "#keep"
TEMP_USAGE = ".temp target health movement str dex con wis int cha"


def say(dispatcher: CommandDispatcher, sender: str, line: str) -> list[str]:
    """Run a channel line and return the lines sent to the channel."""
    return dispatcher.process(sender, CHANNEL, line).messages_for(CHANNEL)


@pytest.fixture
def fixed_roll(dice_roller: DiceRoller, monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Make every roll total 17 and record the dice expressions."""
    expressions: list[str] = []

    def fake_roll(expression: str) -> int:
        expressions.append(expression)
        return 17

    monkeypatch.setattr(dice_roller, "_roll_expression", fake_roll)
    return expressions


class TestRoll:
    """Tests for .roll."""

    def test_basic(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        (line,) = say(dispatcher, logged_in, ".roll")

        match = re.fullmatch(r"test rolled (\d+)\.", line)
        assert match is not None
        assert 1 <= int(match.group(1)) <= 20

    def test_with_stat(
        self,
        dispatcher: CommandDispatcher,
        logged_in: str,
        fixed_roll: list[str],
    ) -> None:
        assert say(dispatcher, logged_in, ".roll str") == ["test rolled 17."]
        assert fixed_roll == ["1d20+1"]

    def test_invalid_stat(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".roll luck") == [
            "luck is not a valid stat.",
            "Options: str dex con wis int cha (or their full names).",
        ]

    def test_monster(
        self,
        dispatcher: CommandDispatcher,
        goblin: str,
        fixed_roll: list[str],
    ) -> None:
        assert say(dispatcher, "dm", f".roll {goblin} dex") == ["Goblin rolled 17."]
        assert fixed_roll == ["1d20+2"]

    def test_monster_needs_dm(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        result = dispatcher.process("alice", CHANNEL, f".roll {goblin}")
        assert result.replies == [Reply("alice", "You must be the DM to do that!")]

    def test_unknown_monster(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "dm", ".roll @7") == ["@7 is not a valid monster."]

    def test_not_logged_in(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "bob", ".roll") == ["bob is not logged in."]

    def test_wrong_arity(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".roll str dex") == [
            "Incorrect format for .roll. Format is:",
            ".roll [@monster] [stat]",
        ]

    def test_monster_with_extra_arguments(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "dm", f".roll {goblin} str dex") == [
            "Incorrect format for .roll. Format is:",
            ".roll [@monster] [stat]",
        ]


class TestLookup:
    """Tests for .lookup."""

    def test_monster_lookup_is_public(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "bob", f".lookup {goblin} hp") == ["Goblin (@0): 20 hp"]

    def test_wrong_arity(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "bob", ".lookup") == [
            "Incorrect format for .lookup. Format is:",
            ".lookup target [stat]",
        ]


class TestUpdateAndIncrease:
    """Tests for .update and .increase."""

    def test_update(self, dispatcher: CommandDispatcher, world: World, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".update str 16") == ["test (alice) now has 16 str."]
        assert world.get_user(logged_in).stats.strength == 16

    def test_increase(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".increase Dexterity 3") == [
            "test (alice) now has 15 Dexterity."
        ]

    def test_increase_saturates(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".increase hp 250") == ["test (alice) now has 255 hp."]

    def test_changes_base_not_temp(
        self,
        dispatcher: CommandDispatcher,
        world: World,
        logged_in: str,
    ) -> None:
        say(dispatcher, "dm", f".temp {logged_in} 5 5 5 5 5 5 5 5")
        say(dispatcher, logged_in, ".update wis 14")

        player = world.get_user(logged_in)
        assert player.stats.wisdom == 14
        assert player.effective_stats().wisdom == 5

    def test_unknown_stat(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".update luck 3") == ["luck is not a valid stat."]

    @pytest.mark.parametrize("value", ["abc", "300", "-2"])
    def test_invalid_value(self, dispatcher: CommandDispatcher, logged_in: str, value: str) -> None:
        assert say(dispatcher, logged_in, f".increase str {value}") == [
            f"{value} is not a valid positive integer."
        ]

    def test_not_logged_in(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "bob", ".update str 3") == ["You're not logged in."]

    def test_wrong_arity(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".update str") == [
            "Incorrect format for .update. Format is:",
            ".update stat value",
        ]


class TestTemporaryStats:
    """Tests for .temp and .cleartemp."""

    def test_temp_and_clear(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, "dm", f".temp {logged_in} 10 20 18 18 18 18 18 18") == [
            "test (alice) now has temporary Health 10, Movement 20, Str 18, Dex 18, Con 18, "
            "Wis 18, Int 18, Cha 18."
        ]
        assert say(dispatcher, "bob", f".lookup {logged_in} str") == ["test (alice): Temp. 18 str"]

        assert say(dispatcher, "dm", f".cleartemp {logged_in}") == [
            "test (alice) has reverted to Health 20, Movement 30, Str 12, Dex 12, Con 12, "
            "Wis 12, Int 12, Cha 12."
        ]
        assert say(dispatcher, "bob", f".lookup {logged_in} str") == ["test (alice): 12 str"]

    def test_temp_on_monster(self, dispatcher: CommandDispatcher, world: World, goblin: str) -> None:
        say(dispatcher, "dm", f".temp {goblin} 40 30 16 14 10 8 10 8")
        assert world.get_entity(goblin, CHANNEL).effective_stats().health == 40

    def test_invalid_stats(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, "dm", f".temp {logged_in} 0 20 18 18 18 18 18 18") == [
            "Stats must be non-zero positive integers. Format is:",
            TEMP_USAGE,
        ]

    def test_unknown_target(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "dm", ".temp bob 1 1 1 1 1 1 1 1") == ["bob is not logged in."]

    def test_requires_dm(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        result = dispatcher.process(logged_in, CHANNEL, f".cleartemp {logged_in}")
        assert result.replies == [Reply(logged_in, "You must be the DM to do that!")]


class TestDamage:
    """Tests for .damage."""

    def test_survives(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "dm", f".damage {goblin} 5") == [
            "Goblin (@0) took 5 damage and has 15 health remaining."
        ]

    def test_unconscious(self, dispatcher: CommandDispatcher, world: World, goblin: str) -> None:
        assert say(dispatcher, "dm", f".damage {goblin} 20") == [
            "Goblin (@0) has fallen unconscious."
        ]
        assert world.get_entity(goblin, CHANNEL).stats.health == 0

    def test_player(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, "dm", f".damage {logged_in} 7") == [
            "test (alice) took 7 damage and has 13 health remaining."
        ]

    def test_invalid_amount(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "dm", f".damage {goblin} lots") == [
            "lots is not a valid positive integer."
        ]

    def test_unknown_monster(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "dm", ".damage @3 5") == ["@3 is not a valid monster."]


class TestMove:
    """Tests for .move."""

    def test_player_moves(self, dispatcher: CommandDispatcher, world: World, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".move 3 4") == ["test moved to (3, 4)."]
        assert world.get_user(logged_in).position == Position(x=3, y=4)

    def test_negative_coordinates(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".move -3 -4") == ["test moved to (-3, -4)."]

    def test_player_too_far(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".move 5 5") == [
            "test can move at most 6 spaces."
        ]

    def test_monster_moves(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        assert say(dispatcher, "dm", f".move {goblin} 0 6") == ["Goblin moved to (0, 6)."]

    def test_monster_too_far(self, dispatcher: CommandDispatcher, world: World, goblin: str) -> None:
        assert say(dispatcher, "dm", f".move {goblin} 5 5") == [
            "Goblin can move at most 6 spaces."
        ]
        assert world.get_entity(goblin, CHANNEL).position == Position()

    def test_monster_needs_dm(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        result = dispatcher.process("alice", CHANNEL, f".move {goblin} 1 1")
        assert result.replies == [Reply("alice", "You must be the DM to do that!")]

    def test_invalid_coordinate(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".move a 4") == ["a is not a valid integer."]

    def test_wrong_arity(self, dispatcher: CommandDispatcher, logged_in: str) -> None:
        assert say(dispatcher, logged_in, ".move 1 2 3") == [
            "Incorrect format for .move. Format is:",
            ".move [@monster] x y",
        ]

    def test_monster_missing_coordinate(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        """Test that one coordinate after a monster is a format error."""
        assert say(dispatcher, "dm", f".move {goblin} 3") == [
            "Incorrect format for .move. Format is:",
            ".move [@monster] x y",
        ]

    def test_move_limit_message(self, dispatcher: CommandDispatcher, goblin: str) -> None:
        (line,) = say(dispatcher, "dm", f".move {goblin} 0 7")
        assert "can move at most 6 spaces." in line


class TestChannelHelp:
    """Tests for .help."""

    def test_describe_prefixed(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "bob", ".help .damage") == [
            ".damage target value",
            "Damage a target (DM only).",
        ]

    def test_describe_bare_name(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        assert say(dispatcher, "bob", ".help move")[0] == ".move [@monster] x y"

    def test_list(self, dispatcher: CommandDispatcher, campaign: str) -> None:
        listing, hint = say(dispatcher, "bob", ".help")

        assert ".roll" in listing
        assert ".cleartemp" in listing
        assert "register" not in listing
        assert hint == "Use .help <command> for details."
