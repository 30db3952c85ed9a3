"""
Preference Extractor - Buckets user utterances into preference slots.

Keyword heuristics only, no language understanding. Two rules feed the
same forward pass over the transcript:

- keyword rules: a user message containing any cue of a rule fills that
  rule's slot (a message may fill several slots);
- scripted answers: a user message that directly answers the assistant
  message asking scripted question j fills the slot question j asks about;
- continuations: a message without cues that directly follows another
  user message, or that opens with a correction ("actually ..."), refills
  the slots the previous user message filled.

Later matches overwrite earlier ones, so each slot holds the user's most
recently stated preference.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

from .sanitizer import sanitize_text
from ..models.conversation import Message
from ..models.preferences import PreferenceSet, PreferenceSlot
from ..models.script import ConversationScript


class PreferenceRule(BaseModel):
    """Keyword set that routes a message into one slot."""
    model_config = ConfigDict(frozen=True)

    slot: PreferenceSlot
    keywords: tuple[str, ...]

    def matches(self, normalized_text: str) -> bool:
        return any(keyword in normalized_text for keyword in self.keywords)


DEFAULT_RULES: tuple[PreferenceRule, ...] = (
    PreferenceRule(slot=PreferenceSlot.DESTINATION, keywords=("travel", "going", "go to")),
    PreferenceRule(slot=PreferenceSlot.DATES, keywords=("date", "when")),
    PreferenceRule(slot=PreferenceSlot.TRAVELERS, keywords=("with", "solo", "family")),
    PreferenceRule(slot=PreferenceSlot.BUDGET, keywords=("budget", "luxury", "cost")),
    PreferenceRule(slot=PreferenceSlot.ACTIVITIES, keywords=("activities", "interested")),
)

# Openers that mark a message as revising the user's previous statement
CORRECTION_CUES: tuple[str, ...] = ("actually", "instead", "i meant", "on second thought")


class PreferenceExtractor:
    """Derives a PreferenceSet from a transcript."""

    def __init__(
        self,
        rules: tuple[PreferenceRule, ...] = DEFAULT_RULES,
        script: Optional[ConversationScript] = None,
        correction_cues: tuple[str, ...] = CORRECTION_CUES
    ):
        self.rules = rules
        self.script = script
        self.correction_cues = correction_cues

    def extract(self, transcript: list[Message]) -> PreferenceSet:
        """
        Scan the transcript in order and fill preference slots.

        Args:
            transcript: Messages in chronological order

        Returns:
            PreferenceSet holding the last matching utterance per slot
        """
        preferences = PreferenceSet()
        assistant_turns = 0
        answering: Optional[PreferenceSlot] = None
        follows_user = False
        last_user_slots: list[PreferenceSlot] = []

        for msg in transcript:
            if msg.is_assistant:
                answering = self._answer_slot(assistant_turns)
                assistant_turns += 1
                follows_user = False
                continue

            slots = self.matching_slots(msg.text)
            if slots:
                if answering is not None and answering not in slots:
                    slots.append(answering)
            elif last_user_slots and (follows_user or self.is_correction(msg.text)):
                slots = list(last_user_slots)
            elif answering is not None:
                slots = [answering]

            for slot in slots:
                preferences.assign(slot, msg.text)

            if slots:
                last_user_slots = slots
            answering = None
            follows_user = True

        return preferences

    def is_correction(self, text: str) -> bool:
        """Whether the text revises something the user said before."""
        normalized = sanitize_text(text.lower())
        return any(cue in normalized for cue in self.correction_cues)

    def matching_slots(self, text: str) -> list[PreferenceSlot]:
        """Slots whose keyword cues appear in the text."""
        normalized = sanitize_text(text.lower())
        return [rule.slot for rule in self.rules if rule.matches(normalized)]

    def _answer_slot(self, question_index: int) -> Optional[PreferenceSlot]:
        if self.script is None:
            return None
        return self.script.answer_slot(question_index)
