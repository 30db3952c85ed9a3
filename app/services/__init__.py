"""Services for the travel chat assistant."""
from .llm_client import LLMClient
from .sanitizer import sanitize_text
from .preference_extractor import PreferenceExtractor, PreferenceRule
from .itinerary_locator import ItineraryLocator
from .conversation_planner import ConversationPlanner, PlannerStep
from .document_renderer import DocumentRenderer
from .pdf_exporter import PdfExporter
from .flow_controller import ChatFlowController, TurnResult

__all__ = [
    "LLMClient",
    "sanitize_text",
    "PreferenceExtractor",
    "PreferenceRule",
    "ItineraryLocator",
    "ConversationPlanner",
    "PlannerStep",
    "DocumentRenderer",
    "PdfExporter",
    "ChatFlowController",
    "TurnResult",
]
