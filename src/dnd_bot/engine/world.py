"""The World: all shared mutable state for one bot process.

The World owns every Game, every logged-in Player and every Monster. It is
created once and passed explicitly to whatever needs it; nothing reaches it
through module globals.

Processing is one chat line at a time, so the World takes no locks. Any
concurrent dispatcher must guard the whole World with a single lock, since
commands such as ``saveall`` walk every logged-in player.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dnd_bot.core.exceptions import InvalidInputError, NotFoundError, StorageError
from dnd_bot.core.logging import get_logger
from dnd_bot.models.entity import Entity
from dnd_bot.models.game import Game
from dnd_bot.models.monster import Monster
from dnd_bot.models.player import Player
from dnd_bot.storage.player_store import PlayerStore


logger = get_logger(__name__)

MONSTER_SIGIL = "@"


@dataclass
class Session:
    """A logged-in player and the channel they logged in to."""

    player: Player
    channel: str


@dataclass
class SaveReport:
    """Outcome of saving every logged-in player.

    Attributes:
        saved: Usernames written successfully.
        failed: Username to error for each failed write.
    """

    saved: list[str] = field(default_factory=list)
    failed: dict[str, StorageError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class World:
    """Registry of games, sessions and monsters."""

    def __init__(self, store: PlayerStore) -> None:
        """Initialize an empty world.

        Args:
            store: Where player records are saved on logout and saveall.
        """
        self.store = store
        self.games: dict[str, Game] = {}
        self.sessions: dict[str, Session] = {}
        self.monsters: dict[str, list[Monster]] = {}

    # =========================================================================
    # Users
    # =========================================================================

    def is_user_logged_in(self, nickname: str) -> bool:
        return nickname in self.sessions

    def is_account_logged_in(self, username: str) -> bool:
        """Check whether any nickname is currently using ``username``."""
        return any(s.player.username == username for s in self.sessions.values())

    def add_user(self, nickname: str, channel: str, player: Player) -> None:
        """Register a logged-in player under a nickname."""
        self.sessions[nickname] = Session(player=player, channel=channel)
        logger.info("User added", nickname=nickname, channel=channel, username=player.username)

    def remove_user(self, nickname: str) -> str:
        """Save and log out a player.

        Args:
            nickname: The logged-in nickname.

        Returns:
            The channel the player had logged in to.

        Raises:
            NotFoundError: If the nickname is not logged in.
            StorageError: If saving fails; the player stays logged in.
        """
        session = self.sessions.get(nickname)
        if session is None:
            raise NotFoundError("User not found.", identifier=nickname)
        self.store.save(session.player)
        del self.sessions[nickname]
        game = self.games.get(session.channel)
        if game is not None:
            game.logout(nickname)
        logger.info("User removed", nickname=nickname, channel=session.channel)
        return session.channel

    def get_user(self, nickname: str) -> Player:
        """Get the player logged in under ``nickname``.

        Raises:
            NotFoundError: If the nickname is not logged in.
        """
        session = self.sessions.get(nickname)
        if session is None:
            raise NotFoundError("User not found.", identifier=nickname)
        return session.player

    def get_user_channel(self, nickname: str) -> str:
        """Channel a nickname logged in to.

        Raises:
            NotFoundError: If the nickname is not logged in.
        """
        session = self.sessions.get(nickname)
        if session is None:
            raise NotFoundError("User not found.", identifier=nickname)
        return session.channel

    # =========================================================================
    # Games
    # =========================================================================

    def game_exists(self, channel: str) -> bool:
        return channel in self.games

    def add_game(self, title: str, dm: str, channel: str) -> Game:
        """Create a campaign in a channel.

        Raises:
            InvalidInputError: If the channel already hosts a game.
        """
        if channel in self.games:
            raise InvalidInputError(
                f"There is already a game in {channel}.",
                field_name="channel",
                invalid_value=channel,
            )
        game = Game(title=title, dm=dm)
        self.games[channel] = game
        logger.info("Game added", channel=channel, title=title, dm=dm)
        return game

    def get_game(self, channel: str) -> Game:
        """Get the campaign in a channel.

        Raises:
            NotFoundError: If there is no game in the channel.
        """
        game = self.games.get(channel)
        if game is None:
            raise NotFoundError("Game not found.", identifier=channel)
        return game

    # =========================================================================
    # Monsters
    # =========================================================================

    def add_monster(self, monster: Monster, channel: str) -> int:
        """Append a monster to a channel's roster.

        Returns:
            The monster's index, addressed in chat as ``@<index>``.
        """
        roster = self.monsters.setdefault(channel, [])
        roster.append(monster)
        index = len(roster) - 1
        logger.info("Monster added", channel=channel, name=monster.name, index=index)
        return index

    def get_monsters(self, channel: str) -> list[Monster]:
        """Monsters of a channel in creation order (empty if none)."""
        return list(self.monsters.get(channel, []))

    # =========================================================================
    # Entities
    # =========================================================================

    def get_entity(self, identifier: str, channel: str | None = None) -> Entity:
        """Resolve a command target.

        ``@N`` names the Nth monster of ``channel``; anything else is a
        logged-in nickname.

        Raises:
            InvalidInputError: If ``@N`` is not a non-negative integer or no
                channel was given.
            NotFoundError: If no such monster or user exists.
        """
        if identifier.startswith(MONSTER_SIGIL):
            index_text = identifier[len(MONSTER_SIGIL):]
            if not index_text.isdecimal():
                raise InvalidInputError(
                    "Non-integer identifier.",
                    field_name="identifier",
                    invalid_value=identifier,
                )
            if channel is None:
                raise InvalidInputError("Monsters require a channel.", invalid_value=identifier)
            index = int(index_text)
            roster = self.monsters.get(channel, [])
            if index >= len(roster):
                raise NotFoundError("No such monster.", identifier=identifier)
            return roster[index]
        return self.get_user(identifier)

    # =========================================================================
    # Persistence
    # =========================================================================

    def save_all(self) -> SaveReport:
        """Save every logged-in player, continuing past failures."""
        report = SaveReport()
        for nickname, session in self.sessions.items():
            username = session.player.username
            try:
                self.store.save(session.player)
            except StorageError as exc:
                logger.error("Save failed", nickname=nickname, username=username, error=exc.message)
                report.failed[username] = exc
            else:
                report.saved.append(username)
        logger.info("World saved", saved=len(report.saved), failed=len(report.failed))
        return report


__all__ = ["World", "Session", "SaveReport", "MONSTER_SIGIL"]
