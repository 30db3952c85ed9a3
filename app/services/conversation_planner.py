"""
Conversation Planner - Decides what to ask the backend after each user message.

The planner walks a fixed question script. For every user turn it
returns the next cursor and the full prompt for the generation backend;
it never calls the backend itself and never mutates a session.
"""
from pydantic import BaseModel, ConfigDict
import logging

from ..models.conversation import ConversationCursor, Message, render_transcript
from ..models.script import ConversationScript

logger = logging.getLogger(__name__)


class PlannerStep(BaseModel):
    """Result of advancing the script by one user turn."""
    model_config = ConfigDict(frozen=True)

    cursor: ConversationCursor
    instruction: str
    prompt: str


class ConversationPlanner:
    """
    State machine over a ConversationScript.

    With N scripted questions:
    - index < N-1: ask question index+1
    - index == N-1: send the closing line, index becomes N
    - index == N: switch itinerary mode on and send the itinerary template
    - itinerary mode: keep sending the itinerary template
    """

    def __init__(self, script: ConversationScript):
        self.script = script

    @property
    def question_count(self) -> int:
        return self.script.question_count

    def advance(
        self,
        cursor: ConversationCursor,
        transcript: list[Message],
        latest_user_text: str
    ) -> PlannerStep:
        """
        Compute the next cursor and backend prompt.

        Args:
            cursor: Cursor before this turn
            transcript: Messages exchanged before the latest user message
            latest_user_text: What the user just sent

        Returns:
            PlannerStep with the new cursor, the bare instruction and the
            full prompt payload
        """
        next_cursor, instruction = self._next(cursor)
        prompt = self.build_prompt(transcript, latest_user_text, instruction)

        logger.debug(
            f"Planner advanced index {cursor.index} -> {next_cursor.index} "
            f"(itinerary_mode={next_cursor.itinerary_mode})"
        )
        return PlannerStep(cursor=next_cursor, instruction=instruction, prompt=prompt)

    def _next(self, cursor: ConversationCursor) -> tuple[ConversationCursor, str]:
        last = self.question_count - 1

        if cursor.itinerary_mode:
            return cursor, self.script.itinerary_template

        if cursor.index < last:
            question = self.script.question(cursor.index + 1).text
            return (
                ConversationCursor(index=cursor.index + 1),
                self.ask_instruction(question),
            )

        if cursor.index == last:
            return (
                ConversationCursor(index=self.question_count),
                self.ask_instruction(self.script.closing_line),
            )

        return (
            ConversationCursor(index=self.question_count, itinerary_mode=True),
            self.script.itinerary_template,
        )

    @staticmethod
    def ask_instruction(question: str) -> str:
        return (
            "Respond naturally to the user's message and then ask this "
            f'specific next question: "{question}"'
        )

    def build_prompt(
        self,
        transcript: list[Message],
        latest_user_text: str,
        instruction: str
    ) -> str:
        """Assemble the full backend request payload."""
        return (
            f"{self.script.persona}\n\n"
            f"Previous conversation:\n{render_transcript(transcript)}\n\n"
            f"User's latest message: {latest_user_text}\n\n"
            f"{instruction}\n\n"
            f"{self.script.response_guidance}"
        )
