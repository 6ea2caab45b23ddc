"""Console entry point.

Reads ``<sender> <recipient> <text>`` lines from stdin and feeds them to
the dispatcher, printing replies and channel operations to stdout.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path

from dnd_bot.commands.dispatcher import CommandDispatcher
from dnd_bot.core.config import Settings, get_settings
from dnd_bot.core.exceptions import ConfigurationError
from dnd_bot.core.logging import configure_logging, get_logger
from dnd_bot.engine.world import World
from dnd_bot.storage.player_store import PlayerStore
from dnd_bot.transport.console import ConsoleTransport, parse_console_line


logger = get_logger(__name__)


# =============================================================================
# Argument Parsing
# =============================================================================


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dnd-bot",
        description="Chat-driven tabletop campaign bot (console mode)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input lines have the form:
  <sender> <recipient> <text>

Examples:
  alice dndbot register alice pw 20 30 12 12 12 12 12 12
  alice dndbot create #keep The Sunless Keep
  alice #keep .roll str
        """,
    )
    parser.add_argument(
        "--users-dir",
        type=Path,
        default=None,
        help="Directory for player records (default: from settings)",
    )
    parser.add_argument(
        "--owner",
        action="append",
        default=None,
        help="Bot owner identity; may be repeated (default: from settings)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    """Overlay command line options on loaded settings."""
    update: dict[str, object] = {}
    if args.users_dir is not None:
        update["storage"] = settings.storage.model_copy(update={"users_dir": args.users_dir})
    if args.owner:
        update["owners"] = [*settings.owners, *args.owner]
    if args.verbose:
        update["log_level"] = "DEBUG"
    return settings.model_copy(update=update) if update else settings


# =============================================================================
# Console Loop
# =============================================================================


def build_dispatcher(settings: Settings) -> CommandDispatcher:
    """Wire store, world, transport and dispatcher together."""
    world = World(PlayerStore(settings.storage.users_dir))
    transport = ConsoleTransport(settings)
    return CommandDispatcher(world, transport, settings=settings)


def run_console(dispatcher: CommandDispatcher, lines: Iterable[str]) -> int:
    """Dispatch every well-formed input line.

    Returns:
        Number of lines dispatched.
    """
    count = 0
    for raw in lines:
        parsed = parse_console_line(raw)
        if parsed is None:
            continue
        sender, recipient, text = parsed
        dispatcher.handle(sender, recipient, text)
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    try:
        settings = apply_arguments(get_settings(), args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )
    logger.info(
        "Starting bot",
        version=settings.app_version,
        users_dir=str(settings.storage.users_dir),
        owners=len(settings.owners),
    )

    dispatcher = build_dispatcher(settings)
    try:
        handled = run_console(dispatcher, sys.stdin)
    except KeyboardInterrupt:
        handled = None

    report = dispatcher.world.save_all()
    logger.info("Shutting down", lines=handled, saved=len(report.saved), failed=len(report.failed))
    return 0 if report.ok else 1


__all__ = ["main", "parse_arguments", "apply_arguments", "build_dispatcher", "run_console"]
