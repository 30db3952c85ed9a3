"""Data models for the travel chat assistant."""
from .conversation import Message, Sender, ConversationCursor, render_transcript
from .script import ConversationScript, ScriptedQuestion, default_script
from .preferences import PreferenceSet, PreferenceSlot, SLOT_ORDER
from .document import FontRole, PageLayout, TextRun, Page, RenderedDocument
from .session import ChatSession, SessionStore

__all__ = [
    "Message",
    "Sender",
    "ConversationCursor",
    "render_transcript",
    "ConversationScript",
    "ScriptedQuestion",
    "default_script",
    "PreferenceSet",
    "PreferenceSlot",
    "SLOT_ORDER",
    "FontRole",
    "PageLayout",
    "TextRun",
    "Page",
    "RenderedDocument",
    "ChatSession",
    "SessionStore",
]
