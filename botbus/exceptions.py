"""Exception hierarchy for botbus.

Every error raised by the package derives from BotBusError, so callers
can catch broadly at the edge while still handling parsing and
registration failures precisely. Structured context passed as keyword
arguments is kept on the instance for logging.
"""

from typing import Any, Optional


class BotBusError(Exception):
    """Base exception for all botbus errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "commands.registry").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


# ---------------------------------------------------------------------------
# Command subsystem exceptions
# ---------------------------------------------------------------------------

class ValidationError(BotBusError, ValueError):
    """Blank or otherwise unusable input handed to the command parser.

    Also a ValueError so callers that only know the builtin
    taxonomy can still catch it.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, module=module or "commands.parser", **context)


class RegistrationError(BotBusError):
    """A command source could not be turned into a registrable Command.

    Raised for values that are not Commands, identifiers that cannot be
    imported, factories that fail, invalid names and alias clashes.

    Attributes:
        source: The value that was passed for registration.
    """

    def __init__(
        self,
        message: str = "",
        *,
        source: Any = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.source = source
        if source is not None:
            context.setdefault("source", repr(source))
        super().__init__(message, module=module or "commands.registry", **context)


class HandlerError(BotBusError):
    """Raised by command implementations for their own failures.

    The bus never catches this; it reaches the caller of execute()
    or handler() unchanged.

    Attributes:
        command: Name of the command that failed (if known).
    """

    def __init__(
        self,
        message: str = "",
        *,
        command: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command = command
        super().__init__(message, module=module or "commands", **context)


# ---------------------------------------------------------------------------
# Configuration exceptions
# ---------------------------------------------------------------------------

class ConfigError(BotBusError):
    """Invalid configuration value.

    Attributes:
        setting_name: Key in settings.yaml that failed validation.
    """

    def __init__(
        self,
        message: str = "",
        *,
        setting_name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.setting_name = setting_name
        super().__init__(message, module=module or "config", **context)
