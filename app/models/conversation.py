"""
Conversation models - Messages, transcript helpers and the script cursor.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum


class Sender(str, Enum):
    """Who wrote a message."""
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in the transcript. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Message content")
    sender: Sender = Field(..., description="'user' or 'assistant'")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER

    @property
    def is_assistant(self) -> bool:
        return self.sender == Sender.ASSISTANT


class ConversationCursor(BaseModel):
    """
    Position within the fixed question script.

    `index` runs from 0 (initial question asked) up to the number of
    scripted questions; `itinerary_mode` switches on one turn after the
    closing line has been sent.
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(default=0, ge=0, description="Index of the last scripted question asked")
    itinerary_mode: bool = Field(default=False, description="Whether itinerary generation has started")


def render_transcript(messages: list[Message]) -> str:
    """Render messages as alternating 'User:' / 'Assistant:' lines."""
    return "\n".join(
        f"{'User' if msg.is_user else 'Assistant'}: {msg.text}"
        for msg in messages
    )
