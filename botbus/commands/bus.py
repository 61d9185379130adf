"""Command bus: parse, look up and invoke commands.

The bus composes a CommandRegistry with the slash-command parser.
handler() is the per-message entry point; execute() runs a named
command directly. Neither catches exceptions raised by commands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog

from .base import ClientHandle, Command
from .parser import ParseOutcome, parse_command
from .registry import CommandRegistry, CommandSource

if TYPE_CHECKING:
    from ..config import Config
    from ..objects import Update

logger = structlog.get_logger("botbus.commands")


class CommandBus:
    """Dispatches slash commands found in message text.

    Args:
        registry: Registry to dispatch against. A new empty one is
            created when omitted.
        fallback: Name of a command to run when the requested one is
            not registered (e.g. "help"). None means unknown commands
            are ignored.
        bot_username: This bot's username. When set, commands
            addressed to a different bot (``/cmd@otherbot``) are ignored.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        fallback: Optional[str] = None,
        bot_username: Optional[str] = None,
    ):
        self.registry = registry if registry is not None else CommandRegistry()
        self.fallback = fallback
        self.bot_username = bot_username

    @classmethod
    def from_config(cls, config: "Config") -> "CommandBus":
        """Build a bus and register the commands listed in settings.yaml."""
        bus = cls(
            registry=CommandRegistry(case_sensitive=config.case_sensitive_commands),
            fallback=config.fallback_command,
            bot_username=config.bot_username,
        )
        bus.add_commands(config.commands)
        logger.info(
            "command_bus_configured",
            commands=list(bus.get_commands()),
            fallback=bus.fallback,
        )
        return bus

    # --- Administrative surface ---

    def add_command(self, source: CommandSource) -> Command:
        return self.registry.add(source)

    def add_commands(self, sources: Iterable[CommandSource]) -> List[Command]:
        return self.registry.add_many(sources)

    def remove_command(self, name: str) -> None:
        self.registry.remove(name)

    def remove_commands(self, names: Iterable[str]) -> None:
        self.registry.remove_many(names)

    def get_commands(self) -> Dict[str, Command]:
        return self.registry.list_commands()

    def parse_command(self, text: str) -> Optional[ParseOutcome]:
        return parse_command(text)

    # --- Dispatch ---

    def execute(
        self,
        name: str,
        arguments: str,
        update: "Update",
        client: Optional[ClientHandle] = None,
    ) -> Any:
        """Run the command registered under ``name``.

        Unknown names run the fallback command when one is configured
        and registered, otherwise return None.

        Returns:
            The command's result, unchanged.
        """
        command = self.registry.get(name)
        if command is None and self.fallback is not None:
            command = self.registry.get(self.fallback)
            if command is not None:
                logger.debug("command_fallback", command=name, fallback=command.name)

        if command is None:
            logger.debug("command_unknown", command=name)
            return None

        logger.debug("command_executing", command=command.name, has_args=bool(arguments))
        return command.make(client, update, arguments, bus=self)

    def handler(
        self,
        text: str,
        update: "Update",
        client: Optional[ClientHandle] = None,
    ) -> "Update":
        """Dispatch the command at the start of ``text``, if any.

        Returns:
            ``update``, unchanged. Command side effects go through the
            client, not the returned value.

        Raises:
            ValidationError: If ``text`` is blank.
        """
        outcome = parse_command(text)
        if outcome is None:
            return update

        if self._addressed_elsewhere(outcome):
            logger.debug(
                "command_other_bot",
                command=outcome.name,
                target_bot=outcome.target_bot,
            )
            return update

        self.execute(outcome.name, outcome.arguments, update, client)
        return update

    def _addressed_elsewhere(self, outcome: ParseOutcome) -> bool:
        if not self.bot_username or not outcome.target_bot:
            return False
        return outcome.target_bot.lower() != self.bot_username.lower()

    def handle_update(
        self, update: "Update", client: Optional[ClientHandle] = None
    ) -> "Update":
        """Run handler() on an update's message text.

        Updates without a text message are returned untouched.
        """
        text = update.text
        if text is None or not text.strip():
            return update
        return self.handler(text, update, client)

    def process_updates(
        self, updates: Iterable["Update"], client: Optional[ClientHandle] = None
    ) -> List["Update"]:
        """Dispatch a batch of updates in order."""
        return [self.handle_update(update, client) for update in updates]
