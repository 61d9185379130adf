"""Built-in /help command."""

from typing import Any

from .base import Command


class HelpCommand(Command):
    """List the commands registered on the dispatching bus."""

    name = "help"
    aliases = ("commands",)
    description = "Show the list of available commands"

    def handle(self, client, update, arguments: str) -> Any:
        if self._bus is None:
            text = "No commands available."
        else:
            commands = self._bus.get_commands()
            lines = [commands[name].get_help() for name in sorted(commands)]
            text = "\n".join(lines) if lines else "No commands available."

        if client is not None:
            self.reply_with_message(text)
        return text
