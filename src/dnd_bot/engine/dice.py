"""Dice rolling mechanics.

Every roll is a single d20 drawn through the d20 library. A stat roll adds
the ability bonus of the roller's effective stats and is floored at 1, so a
very weak creature still rolls at least 1 while a strong one can exceed 20.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import d20

from dnd_bot.core.constants import DIE_SIDES, MIN_ROLL
from dnd_bot.core.exceptions import DiceRollError
from dnd_bot.core.logging import get_logger
from dnd_bot.models.stats import ABILITY_STATS, StatName, resolve_stat


if TYPE_CHECKING:
    from dnd_bot.models.stats import Stats


logger = get_logger(__name__)


class RollType(StrEnum):
    """Which ability, if any, modifies a d20 roll."""

    BASIC = "basic"
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    WISDOM = "wisdom"
    INTELLECT = "intellect"
    CHARISMA = "charisma"

    @property
    def stat(self) -> StatName | None:
        """The ability this roll draws its bonus from."""
        if self is RollType.BASIC:
            return None
        return StatName(self.value)

    @classmethod
    def parse(cls, name: str) -> RollType | None:
        """Resolve a roll type from a full name or abbreviation.

        Health and movement resolve as stats but are not roll types.

        Args:
            name: Name typed by the user, any case.

        Returns:
            The RollType, or None if the name is not a valid roll type.
        """
        if name.strip().lower() == cls.BASIC.value:
            return cls.BASIC
        stat = resolve_stat(name)
        if stat is None or stat not in ABILITY_STATS:
            return None
        return cls(stat.value)


VALID_ROLL_OPTIONS = "str dex con wis int cha"
"""Abbreviations listed when a user names an unknown roll type."""


@dataclass(frozen=True)
class DiceRoll:
    """Result of one d20 roll.

    Attributes:
        roll_type: The type of roll performed.
        natural: The face shown by the die (1-20).
        bonus: Ability bonus that was added.
        total: natural + bonus, floored at 1.
    """

    roll_type: RollType
    natural: int
    bonus: int
    total: int


class DiceRoller:
    """d20 roller.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> roller.roll_basic().total in range(1, 21)
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def _roll_expression(self, expression: str) -> int:
        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc
        return result.total

    def roll_with_bonus(self, bonus: int, roll_type: RollType = RollType.BASIC) -> DiceRoll:
        """Roll 1d20, add a bonus and floor the total at 1.

        Args:
            bonus: Flat modifier, may be negative.
            roll_type: Recorded on the result.

        Returns:
            The roll result.
        """
        expression = f"1d{DIE_SIDES}" if bonus == 0 else f"1d{DIE_SIDES}{bonus:+d}"
        raw = self._roll_expression(expression)
        outcome = DiceRoll(
            roll_type=roll_type,
            natural=raw - bonus,
            bonus=bonus,
            total=max(MIN_ROLL, raw),
        )
        logger.debug(
            "Dice rolled",
            roll_type=roll_type.value,
            natural=outcome.natural,
            bonus=bonus,
            total=outcome.total,
        )
        return outcome

    def roll_basic(self) -> DiceRoll:
        """Roll an unmodified d20."""
        return self.roll_with_bonus(0)

    def roll(self, roll_type: RollType, stats: Stats) -> DiceRoll:
        """Roll for a stat block.

        Args:
            roll_type: Which ability modifies the roll.
            stats: Stats to take the bonus from.

        Returns:
            The roll result.
        """
        stat = roll_type.stat
        bonus = 0 if stat is None else stats.bonus(stat)
        return self.roll_with_bonus(bonus, roll_type)


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Get the shared roller, creating it on first use."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller


__all__ = [
    "RollType",
    "VALID_ROLL_OPTIONS",
    "DiceRoll",
    "DiceRoller",
    "get_default_roller",
]
