"""
Session management - Tracks the transcript and script cursor of a conversation.
"""
from pydantic import BaseModel, Field, PrivateAttr
from typing import Optional
from datetime import datetime
import asyncio
import logging
import uuid

from .conversation import ConversationCursor, Message, Sender

logger = logging.getLogger(__name__)


class ChatSession(BaseModel):
    """A single conversation: transcript plus cursor."""
    session_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique session identifier"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Session creation time"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Last update time"
    )

    # Conversation History (append-only during a session)
    messages: list[Message] = Field(
        default_factory=list,
        description="Transcript"
    )

    # Script position
    cursor: ConversationCursor = Field(
        default_factory=ConversationCursor,
        description="Position within the question script"
    )

    # Held while a reply is being generated
    _turn_lock: asyncio.Lock = PrivateAttr(default_factory=asyncio.Lock)

    @property
    def itinerary_mode(self) -> bool:
        return self.cursor.itinerary_mode

    @property
    def turn_lock(self) -> asyncio.Lock:
        return self._turn_lock

    @property
    def is_busy(self) -> bool:
        return self._turn_lock.locked()

    def add_message(self, sender: Sender, text: str) -> Message:
        """Add a message to the conversation."""
        msg = Message(text=text, sender=sender)
        self.messages.append(msg)
        self.updated_at = datetime.now()
        return msg

    def commit_turn(self, user_text: str, reply: str, cursor: ConversationCursor):
        """Record a completed turn together with the cursor computed for it."""
        self.add_message(Sender.USER, user_text)
        self.add_message(Sender.ASSISTANT, reply)
        self.cursor = cursor

    def reset(self, initial_message: str):
        """Replace the transcript wholesale and rewind the script."""
        self.messages = [Message(text=initial_message, sender=Sender.ASSISTANT)]
        self.cursor = ConversationCursor()
        self.updated_at = datetime.now()

    def snapshot(self) -> list[Message]:
        """Frozen copy of the transcript for extraction and rendering."""
        return list(self.messages)


# In-memory session storage keyed by session key
class SessionStore:
    """Simple in-memory session store."""

    def __init__(self):
        self._sessions: dict[str, ChatSession] = {}

    def create(self, initial_message: str, session_id: Optional[str] = None) -> ChatSession:
        """Create a new session that opens with the initial message."""
        session = ChatSession(session_id=session_id) if session_id else ChatSession()
        session.reset(initial_message)
        self._sessions[session.session_id] = session
        logger.info(f"Created session {session.session_id}")
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str, initial_message: str) -> ChatSession:
        """Resume a saved session, or start one under that key."""
        session = self.get(session_id)
        if session is None:
            session = self.create(initial_message, session_id=session_id)
        return session

    def update(self, session: ChatSession):
        """Update a session."""
        self._sessions[session.session_id] = session

    def delete(self, session_id: str):
        """Delete a session."""
        self._sessions.pop(session_id, None)

    def dump(self, session_id: str) -> Optional[str]:
        """Serialized form of a session, as a host would persist it."""
        session = self.get(session_id)
        return session.model_dump_json() if session else None

    def load(self, payload: str) -> ChatSession:
        """Restore a previously dumped session."""
        session = ChatSession.model_validate_json(payload)
        self._sessions[session.session_id] = session
        return session


# Global session store
session_store = SessionStore()
