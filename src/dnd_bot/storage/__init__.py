"""Storage module for player persistence.

Provides JSON file storage for registered player accounts. Games and
monsters are session state and are never persisted.
"""

from dnd_bot.storage.player_store import PlayerStore

__all__ = [
    "PlayerStore",
]
