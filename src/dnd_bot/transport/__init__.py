"""Chat transports.

Submodules:
    base: The ChatTransport protocol the dispatcher depends on
    console: Stream-backed transport for terminal use
"""

from dnd_bot.transport.base import ChatTransport
from dnd_bot.transport.console import ConsoleTransport, parse_console_line

__all__ = [
    "ChatTransport",
    "ConsoleTransport",
    "parse_console_line",
]
