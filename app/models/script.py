"""
Conversation script - The fixed questions and templates the planner works through.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .preferences import PreferenceSlot


INITIAL_MESSAGE = (
    "Hi! I'm your travel planning assistant. Let's start planning your perfect trip. "
    "Where would you like to go?"
)

PERSONA = "You are a friendly and professional travel planning assistant."

CLOSING_LINE = (
    "Perfect! I'll create a detailed itinerary based on your preferences. "
    "Would you like to see it now?"
)

RESPONSE_GUIDANCE = (
    "Keep your response concise and friendly. "
    "If creating an itinerary, follow the exact format provided."
)

ITINERARY_TEMPLATE = """Create a detailed travel itinerary following this exact format:

# [Destination]: [Type of Trip] - [Duration] Itinerary

## Morning ([Time Range])
• Activity: [Detailed description of morning activity]
• What to Expect: [Practical information and tips]
• Tips: [Important advice for this activity]
• Breakfast: [Meal recommendations]

## Afternoon ([Time Range])
• Lunch ([Time]): [Restaurant recommendation with location]
• Activity ([Time Range]): [Detailed description of afternoon activities]

## Evening ([Time Range])
• Dinner ([Time]): [Restaurant/area recommendation with details]
• Relax: [Evening relaxation suggestions]

## Important Notes
• Transportation: [Transport options and tips]
• Weather: [Weather considerations if applicable]
• Costs: [Budget information]

Make the itinerary specific to the user's preferences and include local recommendations. Use bullet points (•) instead of asterisks."""


class ScriptedQuestion(BaseModel):
    """One question in the script and the preference slot it asks about."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Question sent to the backend verbatim")
    slot: Optional[PreferenceSlot] = Field(None, description="Slot an answer to this question fills")


class ConversationScript(BaseModel):
    """Immutable script configuration for one conversation planner."""
    model_config = ConfigDict(frozen=True)

    initial_message: str = INITIAL_MESSAGE
    persona: str = PERSONA
    questions: tuple[ScriptedQuestion, ...] = Field(..., min_length=1)
    closing_line: str = CLOSING_LINE
    itinerary_template: str = ITINERARY_TEMPLATE
    response_guidance: str = RESPONSE_GUIDANCE

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def question(self, index: int) -> ScriptedQuestion:
        return self.questions[index]

    def answer_slot(self, question_index: int) -> Optional[PreferenceSlot]:
        """Slot filled by an answer to the given question, if any."""
        if 0 <= question_index < len(self.questions):
            return self.questions[question_index].slot
        return None


def default_script() -> ConversationScript:
    """The stock five-question travel planning script."""
    return ConversationScript(
        questions=(
            ScriptedQuestion(
                text="Where would you like to travel? (Please specify a country, city, or region)",
                slot=PreferenceSlot.DESTINATION,
            ),
            ScriptedQuestion(
                text="Great choice! When are you planning to travel?",
                slot=PreferenceSlot.DATES,
            ),
            ScriptedQuestion(
                text="Perfect! Who will be traveling with you? (Solo, couple, family, friends?)",
                slot=PreferenceSlot.TRAVELERS,
            ),
            ScriptedQuestion(
                text="What's your budget range for this trip? (Luxury, mid-range, budget-friendly)",
                slot=PreferenceSlot.BUDGET,
            ),
            ScriptedQuestion(
                text="What kind of activities interest you the most? (e.g., beaches, hiking, culture, food)",
                slot=PreferenceSlot.ACTIVITIES,
            ),
        )
    )
