"""DM-created creatures that live only as long as the campaign session."""

from __future__ import annotations

from pydantic import Field

from dnd_bot.models.entity import Entity
from dnd_bot.models.stats import Stats


class Monster(Entity):
    """A named creature. Names need not be unique; channels address monsters by index."""

    name: str = Field(min_length=1, description="Display name")

    @classmethod
    def create(
        cls,
        name: str,
        health: int,
        movement: int,
        strength: int,
        dexterity: int,
        constitution: int,
        wisdom: int,
        intellect: int,
        charisma: int,
    ) -> Monster:
        return cls(
            name=name,
            stats=Stats.from_values(
                health, movement, strength, dexterity, constitution, wisdom, intellect, charisma
            ),
        )

    @property
    def identifier(self) -> str:
        return self.name


__all__ = ["Monster"]
