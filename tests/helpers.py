"""Command and update builders shared by the test modules."""

from botbus.commands import Command
from botbus.objects import Chat, Message, Update


class MockCommand(Command):
    name = "mycommand"
    description = "Test command"

    def handle(self, client, update, arguments):
        return "mycommand handled"


class MockCommandTwo(Command):
    name = "mycommand2"
    aliases = ("mc2",)
    description = "Second test command"

    def handle(self, client, update, arguments):
        return f"mycommand2 handled: {arguments}"


def make_update(text="/mycommand", update_id=1, chat_id=42):
    """Build a private-chat Update carrying ``text``."""
    return Update(
        update_id=update_id,
        message=Message(
            message_id=update_id,
            chat=Chat(id=chat_id, type="private"),
            text=text,
        ),
    )
