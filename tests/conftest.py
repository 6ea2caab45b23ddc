"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the dnd-bot test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


SAMPLE_STATS = (20, 30, 12, 12, 12, 12, 12, 12)
BOT_NICK = "dndbot"
DM_NICK = "dm"
CHANNEL = "#keep"


# =============================================================================
# Recording Transport
# =============================================================================


class RecordingTransport:
    """Chat transport that records everything instead of sending it."""

    def __init__(self, owners: set[str] | None = None) -> None:
        self.owners = owners or set()
        self.messages: list[tuple[str, str]] = []
        self.operations: list[tuple[str, ...]] = []

    def send_message(self, target: str, text: str) -> None:
        self.messages.append((target, text))

    def join(self, channel: str) -> None:
        self.operations.append(("join", channel))

    def set_topic(self, channel: str, topic: str) -> None:
        self.operations.append(("topic", channel, topic))

    def set_mode(self, channel: str, mode: str) -> None:
        self.operations.append(("mode", channel, mode))

    def invite(self, nickname: str, channel: str) -> None:
        self.operations.append(("invite", nickname, channel))

    def kick(self, channel: str, nickname: str, reason: str) -> None:
        self.operations.append(("kick", channel, nickname, reason))

    def is_owner(self, identity: str) -> bool:
        return identity in self.owners

    def sent_to(self, target: str) -> list[str]:
        return [text for to, text in self.messages if to == target]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_bot.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def users_dir(tmp_path: Path) -> Path:
    """Directory for player records (not created up front)."""
    return tmp_path / "users"


@pytest.fixture
def settings(users_dir: Path) -> Any:
    """Settings pointing storage at a temporary directory.

    Returns:
        Settings instance with "owner" as the only bot owner.
    """
    from dnd_bot.core.config import Settings, StorageSettings

    return Settings(
        owners=["owner"],
        storage=StorageSettings(users_dir=users_dir),
    )


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_stats() -> Any:
    """Stats of (20, 30, 12, 12, 12, 12, 12, 12).

    Returns:
        Stats instance.
    """
    from dnd_bot.models.stats import Stats

    return Stats.from_values(*SAMPLE_STATS)


@pytest.fixture
def sample_player() -> Any:
    """Create the account "test" with password "test".

    Returns:
        Player instance.
    """
    from dnd_bot.models.player import Player

    return Player.create("test", "test", *SAMPLE_STATS)


@pytest.fixture
def sample_monster() -> Any:
    """Create a goblin with movement 30.

    Returns:
        Monster instance.
    """
    from dnd_bot.models.monster import Monster

    return Monster.create("Goblin", 20, 30, 8, 14, 10, 8, 10, 8)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> Any:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    from dnd_bot.engine.dice import DiceRoller

    return DiceRoller(seed=42)


@pytest.fixture
def player_store(users_dir: Path) -> Any:
    """Create a PlayerStore in a temporary directory.

    Returns:
        PlayerStore instance.
    """
    from dnd_bot.storage.player_store import PlayerStore

    return PlayerStore(users_dir)


@pytest.fixture
def world(player_store: Any) -> Any:
    """Create an empty World backed by the temporary store.

    Returns:
        World instance.
    """
    from dnd_bot.engine.world import World

    return World(player_store)


# =============================================================================
# Dispatcher Fixtures
# =============================================================================


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording transport with "owner" as bot owner."""
    return RecordingTransport(owners={"owner"})


@pytest.fixture
def dispatcher(world: Any, transport: RecordingTransport, settings: Any, dice_roller: Any) -> Any:
    """Create a CommandDispatcher wired to the recording transport.

    Returns:
        CommandDispatcher instance.
    """
    from dnd_bot.commands.dispatcher import CommandDispatcher

    return CommandDispatcher(world, transport, settings=settings, roller=dice_roller)


@pytest.fixture
def registered_player(player_store: Any, sample_player: Any) -> Any:
    """Save the sample account so it can log in.

    Returns:
        The saved Player.
    """
    player_store.save(sample_player)
    return sample_player


@pytest.fixture
def campaign(dispatcher: Any) -> str:
    """Create a campaign in #keep with "dm" as DM.

    Returns:
        The campaign channel.
    """
    dispatcher.process(DM_NICK, BOT_NICK, f"create {CHANNEL} The Sunless Keep")
    return CHANNEL


@pytest.fixture
def logged_in(dispatcher: Any, registered_player: Any, campaign: str) -> str:
    """Log "alice" in to the campaign as account "test".

    Returns:
        The logged-in nickname.
    """
    dispatcher.process("alice", BOT_NICK, f"login test test {campaign}")
    return "alice"


@pytest.fixture
def goblin(dispatcher: Any, campaign: str) -> str:
    """Create a goblin (movement 30) as @0 in the campaign.

    Returns:
        The monster reference.
    """
    dispatcher.process(DM_NICK, BOT_NICK, f"addmonster {campaign} Goblin 20 30 8 14 10 8 10 8")
    return "@0"
