"""A campaign bound to one chat channel."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dnd_bot.core.exceptions import PasswordIncorrectError
from dnd_bot.core.logging import get_logger
from dnd_bot.models.player import Player


logger = get_logger(__name__)

LOGIN_SUCCESS = "Login successful."


class Game(BaseModel):
    """Title, fixed DM identity and the roster of logged-in nicknames.

    The roster holds nicknames only; the World owns the Player instances.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = Field(min_length=1, description="Campaign name")
    dm: str = Field(frozen=True, description="Identity of the dungeon master")
    roster: list[str] = Field(default_factory=list, description="Logged-in nicknames")

    def login(self, player: Player, nickname: str, password: str) -> str:
        """Authenticate a player into this campaign.

        Args:
            player: The loaded account.
            nickname: Chat nickname the player is using.
            password: Password as typed.

        Returns:
            The success message.

        Raises:
            PasswordIncorrectError: If the password does not match.
        """
        if not player.verify_password(password):
            logger.info("Login rejected", game=self.title, nickname=nickname)
            raise PasswordIncorrectError()
        if nickname not in self.roster:
            self.roster.append(nickname)
        logger.info("Login accepted", game=self.title, nickname=nickname, username=player.username)
        return LOGIN_SUCCESS

    def logout(self, nickname: str) -> None:
        """Drop a nickname from the roster if present."""
        if nickname in self.roster:
            self.roster.remove(nickname)

    def is_dm(self, identity: str) -> bool:
        return identity == self.dm


__all__ = ["Game", "LOGIN_SUCCESS"]
