"""Grid position used for movement-range arithmetic."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    """An immutable 2D integer coordinate."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0

    def __add__(self, other: Position) -> Position:
        return Position(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(x=self.x - other.x, y=self.y - other.y)

    def distance(self, other: Position) -> int:
        """Distance to another position.

        Defined as floor(sqrt(dx^2 + dy^2)), so (0, 0) to (5, 5) is 7.
        """
        delta = other - self
        return math.isqrt(delta.x * delta.x + delta.y * delta.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


ORIGIN = Position()


__all__ = ["Position", "ORIGIN"]
