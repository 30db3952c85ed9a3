"""
Mock LLM Client - Deterministic offline backend.
Answers scripted turns by asking the requested question and itinerary
turns with a bullet-formatted day plan.
"""
import re
import logging

logger = logging.getLogger(__name__)


_NEXT_QUESTION = re.compile(r'ask this specific next question: "(.+?)"', re.DOTALL)
_FIRST_USER_LINE = re.compile(r"^User: (.+)$", re.MULTILINE)
_LATEST_MESSAGE = re.compile(r"^User's latest message: (.*)$", re.MULTILINE)

ITINERARY_REQUEST_MARKER = "Create a detailed travel itinerary"


class MockLLMClient:
    """Offline stand-in for a chat-completions backend."""

    def __init__(self):
        self.model = "mock-travel-assistant"

    async def generate(self, prompt: str) -> str:
        """Produce a reply for the planner prompt."""
        if ITINERARY_REQUEST_MARKER in prompt:
            logger.debug("Mock backend generating itinerary")
            return self._itinerary(self._destination(prompt))

        match = _NEXT_QUESTION.search(prompt)
        if match:
            return f"Sounds wonderful! {match.group(1)}"

        return "Happy to help! Tell me more about the trip you have in mind."

    def _destination(self, prompt: str) -> str:
        first = _FIRST_USER_LINE.search(prompt) or _LATEST_MESSAGE.search(prompt)
        return self._clean_place(first.group(1)) if first else "Your Destination"

    @staticmethod
    def _clean_place(text: str) -> str:
        words = [w.strip(".,!?") for w in text.split()]
        capitalized = [w for w in words[1:] if w[:1].isupper()]
        return " ".join(capitalized) or text.strip() or "Your Destination"

    def _itinerary(self, destination: str) -> str:
        return f"""Here's your plan! Below is your itinerary.

# {destination}: Highlights Trip - 1 Day Itinerary

## Morning (8:00 AM - 12:00 PM)
• Activity: Walking tour of the historic center of {destination}
• What to Expect: Cobbled streets, landmark architecture and local markets
• Tips: Start early to avoid the crowds and wear comfortable shoes
• Breakfast: A neighborhood cafe near your hotel

## Afternoon (12:00 PM - 5:00 PM)
• Lunch (12:30 PM): A popular local bistro close to the main square
• Activity (2:00 PM - 5:00 PM): Visit the city's best-known museum

## Evening (5:00 PM - 10:00 PM)
• Dinner (7:30 PM): A restaurant in the old town serving regional dishes
• Relax: Sunset stroll along the waterfront

## Important Notes
• Transportation: Public transit day passes are the easiest way around
• Weather: Check the forecast and pack a light layer
• Costs: Plan for moderate daily spending on food and entry fees"""
