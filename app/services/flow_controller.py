"""
Flow Controller - Runs one conversation turn and the itinerary export.
Decides nothing itself: the planner picks the instruction, the backend
writes the reply, and the session is only changed once the reply arrives.
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
import logging

from .conversation_planner import ConversationPlanner
from .document_renderer import DocumentRenderer
from .itinerary_locator import ItineraryLocator
from .llm_client import LLMClient, get_llm_client
from .pdf_exporter import PdfExporter
from .preference_extractor import PreferenceExtractor
from ..errors import BackendError, TurnInProgressError
from ..models.document import RenderedDocument
from ..models.preferences import PreferenceSet
from ..models.script import ConversationScript, default_script
from ..models.session import ChatSession

logger = logging.getLogger(__name__)


class TurnResult(BaseModel):
    """Outcome of a successful turn."""
    reply: str
    question_index: int
    itinerary_mode: bool


class ChatFlowController:
    """
    Controls the conversation flow.

    - Serializes turns per session
    - Asks the planner for the next instruction
    - Sends the prompt to the backend
    - Commits the user message, reply and cursor together
    """

    def __init__(
        self,
        llm: LLMClient,
        script: Optional[ConversationScript] = None,
        renderer: Optional[DocumentRenderer] = None,
        exporter: Optional[PdfExporter] = None
    ):
        self.script = script or default_script()
        self.llm = llm
        self.planner = ConversationPlanner(self.script)
        self.extractor = PreferenceExtractor(script=self.script)
        self.locator = ItineraryLocator()
        self.renderer = renderer or DocumentRenderer()
        self.exporter = exporter or PdfExporter()

    async def process_message(self, session: ChatSession, user_message: str) -> TurnResult:
        """
        Run one user turn.

        Args:
            session: Current conversation session
            user_message: The user's message

        Returns:
            TurnResult with the assistant reply and the committed cursor

        Raises:
            ValueError: if the message is blank
            TurnInProgressError: if another turn is still awaiting its reply
            BackendError: if generation failed; the session is left untouched
        """
        text = user_message.strip()
        if not text:
            raise ValueError("Message must not be empty")

        if session.is_busy:
            raise TurnInProgressError(f"Session {session.session_id} is waiting for a reply")

        async with session.turn_lock:
            step = self.planner.advance(session.cursor, session.snapshot(), text)

            try:
                reply = await self.llm.generate(step.prompt)
            except BackendError:
                logger.error(
                    f"Generation failed for session {session.session_id}; "
                    f"cursor stays at {session.cursor.index}"
                )
                raise

            session.commit_turn(text, reply, step.cursor)

        logger.info(
            f"Session {session.session_id} turn committed: "
            f"index={step.cursor.index}, itinerary_mode={step.cursor.itinerary_mode}"
        )
        return TurnResult(
            reply=reply,
            question_index=step.cursor.index,
            itinerary_mode=step.cursor.itinerary_mode,
        )

    def extract_preferences(self, session: ChatSession) -> PreferenceSet:
        return self.extractor.extract(session.snapshot())

    def locate_itinerary(self, session: ChatSession) -> Optional[str]:
        return self.locator.locate(session.snapshot())

    def render_document(
        self,
        session: ChatSession,
        generated_at: Optional[datetime] = None
    ) -> RenderedDocument:
        """Lay out the itinerary document for the current transcript."""
        transcript = session.snapshot()
        preferences = self.extractor.extract(transcript)
        itinerary = self.locator.locate(transcript)
        return self.renderer.render(preferences, itinerary, generated_at)

    def export_document(
        self,
        session: ChatSession,
        generated_at: Optional[datetime] = None
    ) -> bytes:
        """
        Render and encode the itinerary PDF.

        Raises:
            ExportError: if encoding failed
        """
        document = self.render_document(session, generated_at)
        logger.info(f"Exporting {document.page_count} page(s) for session {session.session_id}")
        return self.exporter.encode(document)

    def reset_session(self, session: ChatSession):
        """Clear the chat and start the script over."""
        session.reset(self.script.initial_message)


# Global flow controller
flow_controller: Optional[ChatFlowController] = None


def get_flow_controller() -> ChatFlowController:
    """Get or create the global flow controller."""
    global flow_controller
    if flow_controller is None:
        flow_controller = ChatFlowController(get_llm_client())
    return flow_controller
