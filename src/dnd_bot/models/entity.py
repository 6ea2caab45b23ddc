"""Shared capability set for everything that can roll, move and take damage.

Player and Monster both extend Entity. The base holds the common substructure
(base stats, an optional temporary override, a position); each variant adds
its own identity fields and supplies ``identifier``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from dnd_bot.core.constants import MOVEMENT_DIVISOR
from dnd_bot.models.position import Position
from dnd_bot.models.stats import Stats


if TYPE_CHECKING:
    from dnd_bot.engine.dice import DiceRoller, RollType


@dataclass(frozen=True)
class MoveOutcome:
    """Result of an attempted move.

    Attributes:
        moved: Whether the entity now stands on the target square.
        position: Position after the attempt.
        max_distance: Spaces the entity could cover this action.
        message: Rejection text when ``moved`` is False, else empty.
    """

    moved: bool
    position: Position
    max_distance: int
    message: str = ""


class Entity(BaseModel):
    """Base stats, temporary override and position."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    stats: Stats = Field(description="Base stats")
    temp_stats: Stats | None = Field(
        default=None,
        description="Session-only override replacing the base stats",
    )
    position: Position = Field(default_factory=Position)

    @property
    def identifier(self) -> str:
        """Name shown in chat replies."""
        raise NotImplementedError

    def effective_stats(self) -> Stats:
        """Temporary stats if set, else base stats."""
        if self.temp_stats is not None:
            return self.temp_stats
        return self.stats

    def has_temp_stats(self) -> bool:
        return self.temp_stats is not None

    def set_temp_stats(self, stats: Stats) -> None:
        """Replace any existing override."""
        self.temp_stats = stats

    def clear_temp_stats(self) -> None:
        self.temp_stats = None

    def damage(self, amount: int) -> bool:
        """Damage the effective stats.

        Returns:
            True if the entity is still conscious.
        """
        return self.effective_stats().damage(amount)

    def max_move_distance(self) -> int:
        """Spaces this entity may move in one action."""
        return self.effective_stats().movement // MOVEMENT_DIVISOR

    def attempt_move(self, target: Position) -> MoveOutcome:
        """Move to ``target`` if it lies within movement range.

        Args:
            target: Destination square.

        Returns:
            MoveOutcome; on rejection the position is unchanged and the
            message names the mover and the limit.
        """
        limit = self.max_move_distance()
        if self.position.distance(target) <= limit:
            self.position = target
            return MoveOutcome(moved=True, position=target, max_distance=limit)
        return MoveOutcome(
            moved=False,
            position=self.position,
            max_distance=limit,
            message=f"{self.identifier} can move at most {limit} spaces.",
        )

    def roll(self, roll_type: RollType, roller: DiceRoller | None = None) -> int:
        """Roll a d20 modified by the effective stats.

        Args:
            roll_type: Which ability modifies the roll.
            roller: Roller to use; the shared default if omitted.

        Returns:
            The roll total, never below 1.
        """
        from dnd_bot.engine.dice import get_default_roller

        dice = roller or get_default_roller()
        return dice.roll(roll_type, self.effective_stats()).total


__all__ = ["Entity", "MoveOutcome"]
