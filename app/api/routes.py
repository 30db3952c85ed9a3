"""
API Routes for the Travel Chat Assistant.
"""
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import Optional
import logging

from ..config import settings
from ..errors import BackendError, ExportError, TurnInProgressError
from ..models.session import ChatSession, session_store
from ..services.flow_controller import get_flow_controller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["travel-assistant"])

BACKEND_ERROR_NOTICE = "Sorry, I encountered an error. Please try again."
EXPORT_ERROR_NOTICE = "Failed to generate PDF. Please try again."


# Request/Response Models
class MessageOut(BaseModel):
    text: str
    sender: str
    timestamp: str


class CreateSessionRequest(BaseModel):
    session_id: Optional[str] = None


class SessionResponse(BaseModel):
    session_id: str
    messages: list[MessageOut]
    itinerary_mode: bool


class ChatRequest(BaseModel):
    session_id: str
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    message: str
    question_index: int
    itinerary_mode: bool


def _get_session(session_id: str) -> ChatSession:
    session = session_store.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _messages_out(session: ChatSession) -> list[MessageOut]:
    return [
        MessageOut(
            text=msg.text,
            sender=msg.sender.value,
            timestamp=msg.timestamp.isoformat()
        )
        for msg in session.messages
    ]


# Endpoints

@router.post("/session", response_model=SessionResponse)
async def open_session(request: Optional[CreateSessionRequest] = None):
    """Open the chat session, resuming its saved transcript if there is one."""
    flow = get_flow_controller()
    session_id = (request.session_id if request else None) or settings.session_key
    session = session_store.get_or_create(session_id, flow.script.initial_message)

    return SessionResponse(
        session_id=session.session_id,
        messages=_messages_out(session),
        itinerary_mode=session.itinerary_mode
    )


@router.delete("/session/{session_id}", response_model=SessionResponse)
async def clear_session(session_id: str):
    """Clear the chat and restart the question script."""
    session = _get_session(session_id)
    get_flow_controller().reset_session(session)
    session_store.update(session)

    return SessionResponse(
        session_id=session.session_id,
        messages=_messages_out(session),
        itinerary_mode=session.itinerary_mode
    )


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Send a chat message and get the assistant's reply."""
    session = _get_session(request.session_id)
    flow = get_flow_controller()

    try:
        result = await flow.process_message(session, request.message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TurnInProgressError:
        raise HTTPException(status_code=409, detail="A reply is still being generated")
    except BackendError as e:
        logger.error(f"Chat turn failed for session {session.session_id}: {e}")
        raise HTTPException(status_code=502, detail=BACKEND_ERROR_NOTICE)

    session_store.update(session)
    return ChatResponse(
        message=result.reply,
        question_index=result.question_index,
        itinerary_mode=result.itinerary_mode
    )


@router.get("/messages/{session_id}")
async def get_messages(session_id: str):
    """Get all chat messages for a session."""
    session = _get_session(session_id)
    return {"messages": _messages_out(session)}


@router.get("/preferences/{session_id}")
async def get_preferences(session_id: str):
    """Get the travel details picked out of the conversation."""
    session = _get_session(session_id)
    preferences = get_flow_controller().extract_preferences(session)
    return {"preferences": preferences.to_display_dict()}


@router.get("/itinerary/{session_id}")
async def get_itinerary(session_id: str):
    """Get the latest itinerary the assistant produced."""
    session = _get_session(session_id)
    itinerary = get_flow_controller().locate_itinerary(session)
    if itinerary is None:
        return {"itinerary": None, "message": "No itinerary generated yet"}

    return {"itinerary": itinerary, "itinerary_mode": session.itinerary_mode}


@router.get("/itinerary/{session_id}/pdf")
async def download_itinerary(session_id: str):
    """
    Download the itinerary as a PDF document.

    The export works in any state; hosts offer the download button only
    once `itinerary_mode` is on. The flag is echoed in `X-Itinerary-Mode`.
    """
    session = _get_session(session_id)

    try:
        pdf_bytes = get_flow_controller().export_document(session)
    except ExportError:
        raise HTTPException(status_code=500, detail=EXPORT_ERROR_NOTICE)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.pdf_filename}"',
            "X-Itinerary-Mode": "true" if session.itinerary_mode else "false",
        }
    )
