"""
Itinerary Locator - Finds the latest assistant message that is an itinerary.
"""
from typing import Optional

from ..models.conversation import Message


ITINERARY_MARKERS: tuple[str, ...] = (
    "itinerary",
    "schedule",
    "here's what i've put together",
    "here's your plan",
)


class ItineraryLocator:
    """Heuristic lookup of the finalized itinerary in a transcript."""

    def __init__(self, markers: tuple[str, ...] = ITINERARY_MARKERS):
        self.markers = tuple(marker.lower() for marker in markers)

    def locate(self, transcript: list[Message]) -> Optional[str]:
        """Text of the most recent matching assistant message, or None."""
        for msg in reversed(transcript):
            if msg.is_assistant and self.is_itinerary(msg.text):
                return msg.text
        return None

    def is_itinerary(self, text: str) -> bool:
        lowered = text.lower()
        return any(marker in lowered for marker in self.markers)
