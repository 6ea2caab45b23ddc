"""Domain models: stats, positions, players, monsters and campaigns.

All models are Pydantic V2 schemas. Player and Monster share the Entity
base (stats, temporary override, position) and differ only in identity.
"""

from __future__ import annotations

from dnd_bot.models.entity import Entity, MoveOutcome
from dnd_bot.models.game import LOGIN_SUCCESS, Game
from dnd_bot.models.monster import Monster
from dnd_bot.models.player import Player, hash_password, validate_username
from dnd_bot.models.position import ORIGIN, Position
from dnd_bot.models.stats import (
    ABILITY_STATS,
    STAT_SYNONYMS,
    StatName,
    Stats,
    resolve_stat,
)


__all__ = [
    # Stats
    "Stats",
    "StatName",
    "STAT_SYNONYMS",
    "ABILITY_STATS",
    "resolve_stat",
    # Position
    "Position",
    "ORIGIN",
    # Entities
    "Entity",
    "MoveOutcome",
    "Player",
    "Monster",
    "hash_password",
    "validate_username",
    # Campaign
    "Game",
    "LOGIN_SUCCESS",
]
