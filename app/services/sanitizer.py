"""
Text sanitizer - Strips characters the standard PDF fonts cannot draw.
"""
import re


_EMOJI = re.compile("[\U0001F600-\U0001F6FF]")
_DINGBATS = re.compile("[\u2700-\u27BF]")
# Anything outside ASCII, plus control characters other than tab/newline/CR
_NON_PORTABLE = re.compile(r"[^\t\n\r\x20-\x7E]")


def sanitize_text(text: str) -> str:
    """Remove emoji, dingbats and non-printable / non-ASCII characters."""
    text = _EMOJI.sub("", text)
    text = _DINGBATS.sub("", text)
    return _NON_PORTABLE.sub("", text)
