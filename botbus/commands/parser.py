"""Slash-command parsing.

Recognizes a command token at the very start of a message::

    /name[@botname] [arguments...]

The name and bot qualifier are made of letters, digits and
underscores. Everything after the separating whitespace is returned
verbatim as the argument string.
"""

import re
from typing import NamedTuple, Optional

from ..exceptions import ValidationError

COMMAND_RE = re.compile(
    r"^/(?P<name>[A-Za-z0-9_]+)(?:@(?P<bot>[A-Za-z0-9_]+))?(?:\s+(?P<args>.*))?$",
    re.DOTALL,
)


class ParseOutcome(NamedTuple):
    """A recognized command token.

    Attributes:
        name: Command name exactly as written, without the slash.
        target_bot: Bot the command was addressed to, or "".
        arguments: Remainder of the message, or "".
    """

    name: str
    target_bot: str
    arguments: str


def parse_command(text: str) -> Optional[ParseOutcome]:
    """Parse a leading command token out of ``text``.

    Returns None when the text does not start with a command. Raises
    ValidationError for blank input.
    """
    if not isinstance(text, str):
        raise ValidationError(
            "Message text must be a string", received=type(text).__name__
        )
    if not text.strip():
        raise ValidationError("Message is empty, cannot parse for command")

    match = COMMAND_RE.match(text)
    if match is None:
        return None
    return ParseOutcome(
        name=match.group("name"),
        target_bot=match.group("bot") or "",
        arguments=match.group("args") or "",
    )
