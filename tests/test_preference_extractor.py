"""Tests for preference extraction."""
from app.models.conversation import Message, Sender
from app.models.preferences import PreferenceSlot
from app.models.script import default_script
from app.services.preference_extractor import (
    DEFAULT_RULES,
    PreferenceExtractor,
    PreferenceRule,
)


def user(text: str) -> Message:
    return Message(text=text, sender=Sender.USER)


def assistant(text: str) -> Message:
    return Message(text=text, sender=Sender.ASSISTANT)


class TestKeywordRules:
    """Test the keyword rule table on its own."""

    def test_destination_cue(self):
        """A destination cue fills the destination slot with the raw text."""
        prefs = PreferenceExtractor().extract([user("I want to go to Japan")])
        assert prefs.destination == "I want to go to Japan"

    def test_last_match_wins(self):
        """A later matching message overwrites an earlier one."""
        extractor = PreferenceExtractor()
        prefs = extractor.extract([
            user("I'm going to Japan"),
            user("Actually I'm going to Korea instead"),
        ])
        assert prefs.destination == "Actually I'm going to Korea instead"

    def test_message_fills_several_slots(self):
        """One message can match more than one rule."""
        prefs = PreferenceExtractor().extract([
            user("Traveling solo on a luxury budget")
        ])
        assert prefs.destination == "Traveling solo on a luxury budget"
        assert prefs.travelers == "Traveling solo on a luxury budget"
        assert prefs.budget == "Traveling solo on a luxury budget"
        assert prefs.dates is None

    def test_case_insensitive(self):
        """Cues match regardless of case."""
        prefs = PreferenceExtractor().extract([user("WHEN? Mid July.")])
        assert prefs.dates == "WHEN? Mid July."

    def test_assistant_messages_ignored(self):
        """Keywords in assistant messages never fill slots."""
        prefs = PreferenceExtractor().extract([
            assistant("When are you planning to travel with family on a budget?")
        ])
        assert prefs.is_empty()

    def test_no_match_leaves_slots_empty(self):
        """Messages without cues leave the set empty."""
        prefs = PreferenceExtractor().extract([user("Hello there")])
        assert prefs.is_empty()
        assert prefs.to_display_dict() == {}

    def test_rules_are_replaceable(self):
        """A custom rule table changes what is extracted."""
        rules = (PreferenceRule(slot=PreferenceSlot.BUDGET, keywords=("cheap",)),)
        prefs = PreferenceExtractor(rules=rules).extract([
            user("Something cheap please"),
            assistant("Noted."),
            user("I want to travel"),
        ])
        assert prefs.budget == "Something cheap please"
        assert prefs.destination is None

    def test_default_rule_order(self):
        """Default rules cover every slot once, in document order."""
        assert [rule.slot for rule in DEFAULT_RULES] == list(PreferenceSlot)


class TestContinuations:
    """Test cue-less follow-ups and corrections."""

    def test_follow_up_replaces_destination(self):
        """A cue-less follow-up refills the slot the previous message filled."""
        prefs = PreferenceExtractor().extract([
            user("I want to go to Japan"),
            user("Actually I want Korea"),
        ])
        assert prefs.destination == "Actually I want Korea"

    def test_correction_after_next_question(self):
        """A correction sent after the next question revises the earlier answer."""
        script = default_script()
        prefs = PreferenceExtractor(script=script).extract([
            assistant(script.initial_message),
            user("I want to go to Japan"),
            assistant(script.question(1).text),
            user("Actually I want Korea"),
        ])
        assert prefs.destination == "Actually I want Korea"
        assert prefs.dates is None

    def test_plain_answer_still_follows_script(self):
        """Without a correction opener the scripted slot is used."""
        script = default_script()
        prefs = PreferenceExtractor(script=script).extract([
            assistant(script.initial_message),
            user("I want to go to Japan"),
            assistant(script.question(1).text),
            user("Next June"),
        ])
        assert prefs.destination == "I want to go to Japan"
        assert prefs.dates == "Next June"

    def test_follow_up_without_earlier_slot(self):
        """A follow-up to a message that filled nothing fills nothing."""
        prefs = PreferenceExtractor().extract([
            user("Hello"),
            user("Korea maybe"),
        ])
        assert prefs.is_empty()

    def test_correction_detection(self):
        """Correction openers are recognized case-insensitively."""
        extractor = PreferenceExtractor()
        assert extractor.is_correction("ACTUALLY, make it Seoul")
        assert extractor.is_correction("Let's do Rome instead")
        assert not extractor.is_correction("Rome sounds good")


class TestScriptedAnswers:
    """Test attribution of direct answers to scripted questions."""

    def _conversation(self, answers: list[str]) -> list[Message]:
        script = default_script()
        messages = [assistant(script.initial_message)]
        for index, answer in enumerate(answers):
            messages.append(user(answer))
            if index + 1 < script.question_count:
                messages.append(assistant(f"Lovely. {script.question(index + 1).text}"))
            else:
                messages.append(assistant(script.closing_line))
        return messages

    def test_full_script_fills_every_slot(self):
        """Answers to all five questions populate all five slots."""
        answers = [
            "I want to travel to Paris",
            "Next June",
            "With my family",
            "mid-range budget",
            "interested in food and culture",
        ]
        extractor = PreferenceExtractor(script=default_script())
        prefs = extractor.extract(self._conversation(answers))

        assert prefs.destination == "I want to travel to Paris"
        assert prefs.dates == "Next June"
        assert prefs.travelers == "With my family"
        assert prefs.budget == "mid-range budget"
        assert prefs.activities == "interested in food and culture"

    def test_answer_without_cue_needs_script(self):
        """Without the script, an uncued answer is not attributed."""
        answers = ["Paris", "Next June"]
        prefs = PreferenceExtractor().extract(self._conversation(answers))
        assert prefs.dates is None

    def test_answers_after_script_use_keywords_only(self):
        """Replies after the closing line fall back to keyword rules."""
        answers = ["Rome", "May", "Solo", "Cheap", "Museums", "Yes please"]
        prefs = PreferenceExtractor(script=default_script()).extract(
            self._conversation(answers)
        )
        assert prefs.destination == "Rome"
        assert prefs.activities == "Museums"

    def test_later_keyword_overrides_scripted_answer(self):
        """Last match wins across both rules."""
        answers = ["Rome", "May", "Solo", "Cheap", "Museums", "Actually going with my partner"]
        prefs = PreferenceExtractor(script=default_script()).extract(
            self._conversation(answers)
        )
        assert prefs.travelers == "Actually going with my partner"
        assert prefs.destination == "Actually going with my partner"
