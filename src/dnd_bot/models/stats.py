"""Stats component shared by players and monsters.

Every stat is addressed by a case-insensitive name drawn from one synonym
table, so chat commands, lookups and roll types all agree on what "con" or
"hp" means.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from dnd_bot.core.constants import BASE_ABILITY_SCORE, STAT_MAX, STAT_MIN


StatValue = Annotated[int, Field(ge=STAT_MIN, le=STAT_MAX, description="Unsigned byte stat")]


class StatName(StrEnum):
    """Canonical stat names. Values match the Stats field names."""

    HEALTH = "health"
    MOVEMENT = "movement"
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    WISDOM = "wisdom"
    INTELLECT = "intellect"
    CHARISMA = "charisma"


STAT_SYNONYMS: dict[StatName, tuple[str, ...]] = {
    StatName.HEALTH: ("health", "hp"),
    StatName.MOVEMENT: ("movement", "move"),
    StatName.STRENGTH: ("strength", "str"),
    StatName.DEXTERITY: ("dexterity", "dex"),
    StatName.CONSTITUTION: ("constitution", "con"),
    StatName.WISDOM: ("wisdom", "wis"),
    StatName.INTELLECT: ("intellect", "int"),
    StatName.CHARISMA: ("charisma", "cha"),
}
"""Accepted spellings for each stat, all lowercase."""

ABILITY_STATS: tuple[StatName, ...] = (
    StatName.STRENGTH,
    StatName.DEXTERITY,
    StatName.CONSTITUTION,
    StatName.WISDOM,
    StatName.INTELLECT,
    StatName.CHARISMA,
)
"""The six ability scores, in display order."""

_LOOKUP: dict[str, StatName] = {
    alias: stat for stat, aliases in STAT_SYNONYMS.items() for alias in aliases
}

_SHORT_LABELS: dict[StatName, str] = {
    StatName.HEALTH: "Health",
    StatName.MOVEMENT: "Movement",
    StatName.STRENGTH: "Str",
    StatName.DEXTERITY: "Dex",
    StatName.CONSTITUTION: "Con",
    StatName.WISDOM: "Wis",
    StatName.INTELLECT: "Int",
    StatName.CHARISMA: "Cha",
}


def resolve_stat(name: str) -> StatName | None:
    """Map any accepted spelling of a stat to its canonical name.

    Args:
        name: Full name or abbreviation, any case.

    Returns:
        The canonical StatName, or None if the name is unknown.
    """
    return _LOOKUP.get(name.strip().lower())


class Stats(BaseModel):
    """Health, movement and the six ability scores.

    Mutated in place by update/increase/damage; validation on assignment
    keeps every field inside the unsigned byte range.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    health: StatValue
    movement: StatValue
    strength: StatValue
    dexterity: StatValue
    constitution: StatValue
    wisdom: StatValue
    intellect: StatValue
    charisma: StatValue

    @classmethod
    def from_values(
        cls,
        health: int,
        movement: int,
        strength: int,
        dexterity: int,
        constitution: int,
        wisdom: int,
        intellect: int,
        charisma: int,
    ) -> Stats:
        """Build stats from positional values in command-argument order."""
        return cls(
            health=health,
            movement=movement,
            strength=strength,
            dexterity=dexterity,
            constitution=constitution,
            wisdom=wisdom,
            intellect=intellect,
            charisma=charisma,
        )

    def get_stat(self, name: str) -> int | None:
        """Look up a stat by any accepted spelling.

        Args:
            name: Full name or abbreviation, any case.

        Returns:
            The stat value, or None if the name is unknown.
        """
        stat = resolve_stat(name)
        if stat is None:
            return None
        return getattr(self, stat.value)

    def update_stat(self, name: str, value: int) -> None:
        """Set a stat. Unknown names are ignored."""
        stat = resolve_stat(name)
        if stat is not None:
            setattr(self, stat.value, value)

    def increase_stat(self, name: str, value: int) -> None:
        """Add to a stat, saturating at the byte maximum. Unknown names are ignored."""
        stat = resolve_stat(name)
        if stat is not None:
            current = getattr(self, stat.value)
            setattr(self, stat.value, min(STAT_MAX, current + value))

    @staticmethod
    def calc_bonus(score: int) -> int:
        """Calculate the ability bonus for a score.

        Rounds toward negative infinity, so 9 gives -1 and 8 gives -1.
        """
        return (score - BASE_ABILITY_SCORE) // 2

    def bonus(self, stat: StatName) -> int:
        """Ability bonus for one of this block's stats."""
        return self.calc_bonus(getattr(self, stat.value))

    def damage(self, amount: int) -> bool:
        """Apply damage to health.

        Args:
            amount: Non-negative damage.

        Returns:
            False if the damage was lethal (health is now 0), True otherwise.
        """
        if amount >= self.health:
            self.health = 0
            return False
        self.health -= amount
        return True

    def __str__(self) -> str:
        return ", ".join(
            f"{_SHORT_LABELS[stat]} {getattr(self, stat.value)}" for stat in StatName
        )


__all__ = [
    "StatValue",
    "StatName",
    "STAT_SYNONYMS",
    "ABILITY_STATS",
    "resolve_stat",
    "Stats",
]
