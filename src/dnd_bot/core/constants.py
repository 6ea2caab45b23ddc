"""Rules constants shared across the bot."""

from __future__ import annotations

# =============================================================================
# Stats
# =============================================================================

STAT_MIN = 0
"""Smallest value any stat can hold."""

STAT_MAX = 255
"""Largest value any stat can hold (stats are stored as unsigned bytes)."""

BASE_ABILITY_SCORE = 10
"""Ability score with a bonus of zero."""

# =============================================================================
# Dice
# =============================================================================

DIE_SIDES = 20
"""Every roll is a single d20."""

MIN_ROLL = 1
"""Stat-modified rolls never drop below this."""

# =============================================================================
# Movement
# =============================================================================

MOVEMENT_DIVISOR = 5
"""Movement stat divided by this gives the spaces an entity may move per action."""


__all__ = [
    "STAT_MIN",
    "STAT_MAX",
    "BASE_ABILITY_SCORE",
    "DIE_SIDES",
    "MIN_ROLL",
    "MOVEMENT_DIVISOR",
]
