"""Command framework for botbus.

Provides the Command ABC, the CommandRegistry that maps names and
aliases to live commands, the slash-command parser and the CommandBus
that ties them together.
"""

from .base import ClientHandle, Command
from .bus import CommandBus
from .help import HelpCommand
from .parser import ParseOutcome, parse_command
from .registry import CommandRegistry, CommandSource

__all__ = [
    "ClientHandle",
    "Command",
    "CommandBus",
    "CommandRegistry",
    "CommandSource",
    "HelpCommand",
    "ParseOutcome",
    "parse_command",
]
