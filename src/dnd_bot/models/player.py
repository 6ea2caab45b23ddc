"""Registered player accounts.

A Player is the persisted side of a participant: credentials, base stats,
feats and position. The temporary stats override lives on the instance only
and is never written to a record.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from typing import Any

from pydantic import Field

from dnd_bot.core.exceptions import InvalidInputError
from dnd_bot.models.entity import Entity
from dnd_bot.models.position import Position
from dnd_bot.models.stats import Stats


USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_\-\[\]\\`^{}|]+$")
"""Nickname-style characters; nothing that could escape the users directory."""


def hash_password(password: str) -> str:
    """One-way hash of a password as a lowercase SHA-512 hex digest.

    Raises:
        InvalidInputError: If the password cannot be encoded.
    """
    try:
        encoded = password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError("Password could not be hashed.", field_name="password") from exc
    return hashlib.sha512(encoded).hexdigest()


def validate_username(username: str) -> str:
    """Check that a username is a plain name.

    Raises:
        InvalidInputError: If the name is empty or has disallowed characters.
    """
    if not USERNAME_PATTERN.match(username):
        raise InvalidInputError(
            f"{username} is not a valid username.",
            field_name="username",
            invalid_value=username,
        )
    return username


class Player(Entity):
    """A registered account that can log in to a campaign."""

    username: str = Field(min_length=1, frozen=True, description="Unique account name")
    password_hash: str = Field(description="SHA-512 hex digest of the password")
    feats: list[str] = Field(default_factory=list, description="Feat names in the order added")

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        health: int,
        movement: int,
        strength: int,
        dexterity: int,
        constitution: int,
        wisdom: int,
        intellect: int,
        charisma: int,
    ) -> Player:
        """Create a new account with no feats, no override, at the origin.

        Raises:
            InvalidInputError: If the username is invalid or hashing fails.
        """
        return cls(
            username=validate_username(username),
            password_hash=hash_password(password),
            stats=Stats.from_values(
                health, movement, strength, dexterity, constitution, wisdom, intellect, charisma
            ),
            position=Position(),
        )

    @property
    def identifier(self) -> str:
        return self.username

    def verify_password(self, password: str) -> bool:
        """Compare a supplied password against the stored hash."""
        return hmac.compare_digest(self.password_hash, hash_password(password))

    def add_feat(self, name: str) -> None:
        """Append a feat. Duplicates are kept."""
        self.feats.append(name)

    def feats_display(self) -> str:
        return ", ".join(self.feats) if self.feats else "none"

    def to_record(self) -> dict[str, Any]:
        """Serializable record without the temporary override."""
        return self.model_dump(mode="json", exclude={"temp_stats"})

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Player:
        """Rebuild a player from a stored record, ignoring any temp stats."""
        cleaned = {key: value for key, value in data.items() if key != "temp_stats"}
        return cls.model_validate(cleaned)


__all__ = ["Player", "hash_password", "validate_username", "USERNAME_PATTERN"]
