"""File-backed persistence for player records.

One JSON document per player, stored at ``<root>/<username>.json``. Records
are Pydantic dumps of Player without the temporary stats override.

Storage location: the configured ``users_dir`` (default ``./users``).
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from dnd_bot.core.exceptions import NotFoundError, StorageError
from dnd_bot.core.logging import get_logger
from dnd_bot.models.player import USERNAME_PATTERN, Player


logger = get_logger(__name__)


class PlayerStore:
    """Load and save player records as JSON files."""

    def __init__(self, root: str | Path) -> None:
        """Initialize the store.

        Args:
            root: Directory holding the records. Created on first save.
        """
        self.root = Path(root)

    def _path_for(self, username: str) -> Path:
        if not USERNAME_PATTERN.match(username):
            raise NotFoundError(f"No record for {username}.", identifier=username)
        return self.root / f"{username}.json"

    def exists(self, username: str) -> bool:
        """Check whether a record is stored for ``username``."""
        try:
            return self._path_for(username).is_file()
        except NotFoundError:
            return False

    def load(self, username: str) -> Player:
        """Read a player's record.

        Args:
            username: Account name.

        Returns:
            The player, without temporary stats.

        Raises:
            NotFoundError: If there is no record for the username.
            StorageError: If the record cannot be read or decoded.
        """
        path = self._path_for(username)
        if not path.is_file():
            raise NotFoundError(f"No record for {username}.", identifier=username)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            player = Player.from_record(data)
        except OSError as exc:
            raise StorageError(
                f"Failed to read player data: {exc}",
                username=username,
                path=str(path),
            ) from exc
        except (ValueError, TypeError, PydanticValidationError) as exc:
            raise StorageError(
                "Failed to decode player data.",
                username=username,
                path=str(path),
                details={"original_error": str(exc)},
            ) from exc

        if player.username != username:
            raise StorageError(
                "Player record does not match its file name.",
                username=username,
                path=str(path),
            )
        logger.debug("Player loaded", username=username)
        return player

    def save(self, player: Player) -> None:
        """Write a player's record, replacing any previous one.

        Raises:
            StorageError: If the directory or file cannot be written.
        """
        path = self._path_for(player.username)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(player.to_record(), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Player save failed", username=player.username, error=str(exc))
            raise StorageError(
                f"Failed to save player data: {exc}",
                username=player.username,
                path=str(path),
            ) from exc
        logger.info("Player saved", username=player.username)


__all__ = ["PlayerStore"]
