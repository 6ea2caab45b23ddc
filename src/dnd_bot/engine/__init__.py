"""Game engine module: dice and the shared World.

Submodules:
    dice: d20 rolls with ability bonuses (d20 library)
    world: Registry of games, logged-in players and monsters
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_bot.engine.dice import (
    VALID_ROLL_OPTIONS,
    DiceRoll,
    DiceRoller,
    RollType,
    get_default_roller,
)

# =============================================================================
# World
# =============================================================================
from dnd_bot.engine.world import MONSTER_SIGIL, SaveReport, Session, World


__all__ = [
    # Dice Rolling
    "RollType",
    "VALID_ROLL_OPTIONS",
    "DiceRoll",
    "DiceRoller",
    "get_default_roller",
    # World
    "World",
    "Session",
    "SaveReport",
    "MONSTER_SIGIL",
]
