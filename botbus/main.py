"""Main entry point for botbus.

Initializes logging in two phases (defaults, then config-driven) and
builds the CommandBus from settings.yaml. ``run`` drives the bus from
standard input, one message per line, replying on standard output.

Key functions:
    create_bus: Set up logging and config, return a configured bus.
    run: Console-script entry point.
"""

import sys
from typing import Any, Optional, TextIO

import structlog

from .logging_config import setup_logging


class ConsoleClient:
    """Client handle that writes replies to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def send_message(self, **params: Any) -> dict:
        self.stream.write(f"{params.get('text', '')}\n")
        return params


def create_bus(config=None):
    """Build a CommandBus from config, configuring logging on the way."""
    # Phase 1: defaults, loggers not cached
    setup_logging()
    logger = structlog.get_logger("botbus")

    # Import here to ensure logging is configured first
    from .commands import CommandBus
    from .config import get_config

    if config is None:
        config = get_config()
    config.validate()

    # Phase 2: reconfigure with real config
    setup_logging(config)

    bus = CommandBus.from_config(config)
    logger.info("botbus_ready", commands=len(bus.get_commands()))
    return bus


def run(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """Dispatch each line of input as a private chat message."""
    from .objects import Chat, Message, Update

    bus = create_bus()
    client = ConsoleClient(stdout)
    chat = Chat(id=0, type="private")
    for update_id, line in enumerate(stdin or sys.stdin, start=1):
        text = line.rstrip("\n")
        update = Update(
            update_id=update_id,
            message=Message(message_id=update_id, chat=chat, text=text),
        )
        bus.handle_update(update, client)


if __name__ == "__main__":
    run()
