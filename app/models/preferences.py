"""
Preference models - Travel details pulled out of the transcript.
"""
from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class PreferenceSlot(str, Enum):
    """Named preference categories, in document order."""
    DESTINATION = "destination"
    DATES = "dates"
    TRAVELERS = "travelers"
    BUDGET = "budget"
    ACTIVITIES = "activities"


SLOT_ORDER: tuple[PreferenceSlot, ...] = tuple(PreferenceSlot)


class PreferenceSet(BaseModel):
    """
    Most recent user utterance for each preference slot.
    Derived from the transcript on demand, never persisted on its own.
    """
    destination: Optional[str] = Field(None, description="Where the user wants to go")
    dates: Optional[str] = Field(None, description="When the user wants to travel")
    travelers: Optional[str] = Field(None, description="Who is traveling")
    budget: Optional[str] = Field(None, description="Budget range")
    activities: Optional[str] = Field(None, description="Activities of interest")

    def get(self, slot: PreferenceSlot) -> Optional[str]:
        return getattr(self, slot.value)

    def assign(self, slot: PreferenceSlot, text: str):
        """Overwrite a slot (last match wins)."""
        setattr(self, slot.value, text)

    def filled(self) -> list[tuple[PreferenceSlot, str]]:
        """Non-empty slots in fixed slot order."""
        return [
            (slot, self.get(slot))
            for slot in SLOT_ORDER
            if self.get(slot)
        ]

    def is_empty(self) -> bool:
        return not self.filled()

    def to_display_dict(self) -> dict:
        """Non-empty slots keyed by slot name."""
        return {slot.value: value for slot, value in self.filled()}
