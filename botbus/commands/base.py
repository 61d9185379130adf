"""Base classes for the command framework.

A Command is a named unit of behavior invoked with a client handle,
the inbound Update and the argument string that followed the command
token. Commands are registered with a CommandRegistry and dispatched
by a CommandBus.

Key classes:
    ClientHandle: Protocol for the chat platform client passed to commands.
    Command: ABC every registrable command must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, runtime_checkable

import structlog

from ..exceptions import HandlerError

if TYPE_CHECKING:
    from ..objects import Update
    from .bus import CommandBus

logger = structlog.get_logger("botbus.commands")


@runtime_checkable
class ClientHandle(Protocol):
    """Chat platform client handed opaquely to every command.

    The bus never calls it. Built-in commands only use send_message.
    """

    def send_message(self, **params: Any) -> Any:
        ...


class Command(ABC):
    """Abstract base class for all commands.

    Subclasses set ``name`` (the token after the slash, without it),
    optionally ``aliases`` and ``description``, and implement handle().

    Example:
        class StartCommand(Command):
            name = "start"
            aliases = ("begin",)
            description = "Say hello"

            def handle(self, client, update, arguments):
                return self.reply_with_message("Hello!")
    """

    name: str = ""
    description: str = ""
    aliases: Sequence[str] = ()

    def __init__(self) -> None:
        self.client: Optional[ClientHandle] = None
        self.update: Optional["Update"] = None
        self.arguments: str = ""
        self._bus: Optional["CommandBus"] = None

    def make(
        self,
        client: Optional[ClientHandle],
        update: "Update",
        arguments: str,
        bus: Optional["CommandBus"] = None,
    ) -> Any:
        """Bind the invocation context and run handle().

        Args:
            client: Platform client for replies and other API calls.
            update: The update that triggered the command.
            arguments: Everything after the command token, verbatim.
            bus: Bus that dispatched the command, used by trigger_command().

        Returns:
            Whatever handle() returns.
        """
        self.client = client
        self.update = update
        self.arguments = arguments
        self._bus = bus
        return self.handle(client, update, arguments)

    @abstractmethod
    def handle(self, client: Optional[ClientHandle], update: "Update", arguments: str) -> Any:
        """Run the command.

        Args:
            client: Platform client for replies and other API calls.
            update: The update that triggered the command.
            arguments: Everything after the command token, verbatim.

        Returns:
            Any result value. The bus passes it through to execute()'s caller.
        """
        ...

    def reply_with_message(self, text: str, **params: Any) -> Any:
        """Send ``text`` to the chat the current update came from."""
        if self.client is None:
            raise HandlerError("No client bound to command", command=self.name)
        chat_id = getattr(self.update, "chat_id", None)
        if chat_id is None:
            raise HandlerError("Update has no chat to reply to", command=self.name)
        return self.client.send_message(chat_id=chat_id, text=text, **params)

    def trigger_command(self, name: str, arguments: str = "") -> Any:
        """Execute another registered command with the current context."""
        if self._bus is None:
            raise HandlerError(
                "Command was not dispatched by a bus", command=self.name, target=name
            )
        logger.debug("command_triggered", command=self.name, target=name)
        return self._bus.execute(name, arguments, self.update, self.client)

    def get_help(self) -> str:
        """One-line help entry for this command."""
        return f"/{self.name} - {self.description}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
