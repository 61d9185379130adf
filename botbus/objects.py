"""Pydantic models for inbound chat updates.

Only the fields the command bus and the built-in commands read are
declared; anything else the platform sends is kept as extra data.
All models are frozen, so an Update handed to the bus is never
mutated by it.

Models:
    User, Chat, Message, Update
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class User(_Frozen):
    """Sender of a message."""

    id: int
    is_bot: bool = False
    first_name: str = ""
    username: Optional[str] = None


class Chat(_Frozen):
    """Conversation a message belongs to."""

    id: int
    type: str = Field(default="private", description="'private', 'group', 'supergroup' or 'channel'")
    title: Optional[str] = None
    username: Optional[str] = None


class Message(_Frozen):
    """A single chat message."""

    message_id: int
    chat: Chat
    from_user: Optional[User] = Field(default=None, alias="from")
    date: int = 0
    text: Optional[str] = None


class Update(_Frozen):
    """One inbound event as delivered by the platform."""

    update_id: int
    message: Optional[Message] = None

    @property
    def text(self) -> Optional[str]:
        """Message text, or None for updates without a text message."""
        if self.message is None:
            return None
        return self.message.text

    @property
    def chat_id(self) -> Optional[int]:
        if self.message is None:
            return None
        return self.message.chat.id
