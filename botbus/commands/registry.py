"""Command registry.

Maps command names and aliases to live Command instances. Sources
passed to add() may be an instance, a Command subclass, a factory
callable or a dotted import path; all of them are resolved to an
instance up front so misconfiguration fails at startup.
"""

import importlib
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, Union

import structlog

from ..exceptions import RegistrationError
from .base import Command

logger = structlog.get_logger("botbus.commands")

NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")

# Anything add() knows how to turn into a Command
CommandSource = Union[Command, Type[Command], Callable[[], Command], str]


def _import_identifier(identifier: str) -> Any:
    """Resolve ``package.module:Name`` or ``package.module.Name``."""
    if ":" in identifier:
        module_name, _, attr = identifier.partition(":")
    else:
        module_name, _, attr = identifier.rpartition(".")
    if not module_name or not attr or module_name.startswith("."):
        raise RegistrationError(
            f"Command identifier {identifier!r} cannot be resolved",
            source=identifier,
        )
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise RegistrationError(
            f"Command module {module_name!r} could not be imported",
            source=identifier,
            error=str(e),
            error_type=type(e).__name__,
        ) from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise RegistrationError(
            f"Module {module_name!r} has no attribute {attr!r}",
            source=identifier,
        ) from e


class CommandRegistry:
    """Registry of live Command instances.

    Primary names and aliases are kept in separate tables so that
    list_commands() reports each command once. Lookup tries the
    name table first, then aliases.

    Args:
        case_sensitive: When False, names and aliases are stored and
            looked up lower-cased.
    """

    def __init__(self, case_sensitive: bool = True):
        self.case_sensitive = case_sensitive
        self._commands: Dict[str, Command] = {}
        self._aliases: Dict[str, Command] = {}

    def _key(self, name: str) -> str:
        return name if self.case_sensitive else name.lower()

    # --- Resolution and validation ---

    def resolve(self, source: CommandSource) -> Command:
        """Turn a registration source into a Command instance.

        Raises:
            RegistrationError: If the source cannot be resolved or does
                not produce a Command.
        """
        if isinstance(source, Command):
            return source

        target = _import_identifier(source) if isinstance(source, str) else source
        if isinstance(target, Command):
            return target

        if isinstance(target, type) and not issubclass(target, Command):
            raise RegistrationError(
                f"{target.__name__} is not a Command subclass", source=source
            )
        if not callable(target):
            raise RegistrationError(
                f"{type(target).__name__} object is not a Command", source=source
            )

        try:
            command = target()
        except Exception as e:
            raise RegistrationError(
                "Command could not be constructed",
                source=source,
                error=str(e),
                error_type=type(e).__name__,
            ) from e

        if not isinstance(command, Command):
            raise RegistrationError(
                f"Factory returned {type(command).__name__}, not a Command",
                source=source,
            )
        return command

    def _validate(self, command: Command, names: Mapping[str, Command]) -> None:
        if not isinstance(command.name, str) or not NAME_RE.match(command.name):
            raise RegistrationError(
                f"Invalid command name {command.name!r}", source=command
            )
        if isinstance(command.aliases, str):
            raise RegistrationError(
                f"Aliases of {command.name!r} must be a sequence of names, not a string",
                source=command,
            )
        for alias in command.aliases:
            if not isinstance(alias, str) or not NAME_RE.match(alias):
                raise RegistrationError(
                    f"Invalid alias {alias!r} for command {command.name!r}",
                    source=command,
                )
            key = self._key(alias)
            if key == self._key(command.name):
                continue
            existing = names.get(key)
            if existing is not None and existing is not command:
                raise RegistrationError(
                    f"Alias {alias!r} clashes with existing command {existing.name!r}",
                    source=command,
                )

    def _store(self, command: Command) -> None:
        key = self._key(command.name)
        previous = self._commands.get(key)
        if previous is not None and previous is not command:
            logger.warning(
                "command_overwritten",
                command=command.name,
                previous=type(previous).__name__,
                replacement=type(command).__name__,
            )
            # The replaced instance must not stay reachable through its aliases
            for alias_key in [k for k, v in self._aliases.items() if v is previous]:
                del self._aliases[alias_key]
        self._commands[key] = command

        for alias in command.aliases:
            alias_key = self._key(alias)
            if alias_key == key:
                continue
            previous = self._aliases.get(alias_key)
            if previous is not None and previous is not command:
                logger.warning(
                    "command_alias_overwritten",
                    alias=alias,
                    command=command.name,
                    previous=previous.name,
                )
            self._aliases[alias_key] = command

        logger.debug(
            "command_registered",
            command=command.name,
            aliases=list(command.aliases),
            handler=type(command).__name__,
        )

    # --- Mutation ---

    def add(self, source: CommandSource) -> Command:
        """Register a single command, overwriting any command of the same name.

        Returns:
            The registered Command instance.

        Raises:
            RegistrationError: If the source is not a valid Command.
        """
        command = self.resolve(source)
        self._validate(command, self._commands)
        self._store(command)
        return command

    def add_many(self, sources: Iterable[CommandSource]) -> List[Command]:
        """Register several commands, all or nothing.

        Every source is resolved and validated before anything is
        stored, so a failing element leaves the registry untouched.
        """
        pending = dict(self._commands)
        commands = []
        for source in sources:
            command = self.resolve(source)
            self._validate(command, pending)
            pending[self._key(command.name)] = command
            commands.append(command)

        for command in commands:
            self._store(command)
        return commands

    def remove(self, name: str) -> None:
        """Remove a command name or alias. Unknown names are ignored."""
        key = self._key(name)
        removed = self._commands.pop(key, None)
        removed_alias = self._aliases.pop(key, None)
        if removed is not None or removed_alias is not None:
            logger.debug("command_removed", command=name)

    def remove_many(self, names: Iterable[str]) -> None:
        for name in names:
            self.remove(name)

    # --- Lookup ---

    def get(self, name: str) -> Optional[Command]:
        """Get a command by name or alias."""
        key = self._key(name)
        command = self._commands.get(key)
        if command is None:
            command = self._aliases.get(key)
        return command

    def list_commands(self) -> Dict[str, Command]:
        """Snapshot of primary name -> command, in registration order."""
        return dict(self._commands)

    def aliases(self) -> Dict[str, Command]:
        """Snapshot of alias -> command."""
        return dict(self._aliases)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands)
