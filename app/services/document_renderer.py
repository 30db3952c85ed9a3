"""
Document Renderer - Lays preferences and itinerary text out on fixed-size pages.
"""
from datetime import datetime
from typing import Optional

from .sanitizer import sanitize_text
from ..models.document import (
    BLACK,
    MUTED_GRAY,
    FontRole,
    Page,
    PageLayout,
    RenderedDocument,
    TextRun,
)
from ..models.preferences import PreferenceSet


DOCUMENT_TITLE = "Travel Itinerary"
DETAILS_HEADING = "Travel Details"
ITINERARY_HEADING = "Detailed Itinerary"

# English names regardless of the process locale
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_long_date(moment: datetime) -> str:
    """e.g. 'Monday, January 1, 2024'."""
    return f"{WEEKDAYS[moment.weekday()]}, {MONTHS[moment.month - 1]} {moment.day}, {moment.year}"


class _PageCursor:
    """Tracks the current page and baseline while laying out."""

    def __init__(self, layout: PageLayout):
        self.layout = layout
        self.document = RenderedDocument()
        self.page = self._new_page()
        self.y = layout.top

    def _new_page(self) -> Page:
        page = Page(width=self.layout.width, height=self.layout.height)
        self.document.pages.append(page)
        return page

    def ensure_room(self, lines: float = 1):
        """Break to a new page if fewer than `lines` line heights remain."""
        if self.y < self.layout.margin + self.layout.line_height * lines:
            self.page = self._new_page()
            self.y = self.layout.top

    def draw(self, text: str, role: FontRole, size: float, color=BLACK):
        self.page.runs.append(
            TextRun(text=text, x=self.layout.margin, y=self.y, role=role, size=size, color=color)
        )

    def move_down(self, amount: float):
        self.y -= amount


class DocumentRenderer:
    """Builds a RenderedDocument from extracted preferences and itinerary text."""

    def __init__(self, layout: Optional[PageLayout] = None):
        self.layout = layout or PageLayout()

    def render(
        self,
        preferences: PreferenceSet,
        itinerary_text: Optional[str],
        generated_at: Optional[datetime] = None
    ) -> RenderedDocument:
        """
        Lay out the document top-down in a single column.

        Sections with nothing to show are left out. Rendering never fails.
        """
        layout = self.layout
        cursor = _PageCursor(layout)
        line_height = layout.line_height

        # Title and timestamp
        cursor.draw(DOCUMENT_TITLE, FontRole.BOLD_TITLE, layout.title_size)
        cursor.move_down(layout.title_size * layout.line_height_factor)

        stamp = format_long_date(generated_at or datetime.now())
        cursor.draw(f"Generated on {stamp}", FontRole.BODY, layout.body_size, MUTED_GRAY)
        cursor.move_down(line_height * 2)

        # Travel details
        filled = preferences.filled()
        if filled:
            self._subtitle(cursor, DETAILS_HEADING)
            for slot, value in filled:
                self._body_line(cursor, f"{slot.value.capitalize()}: {sanitize_text(value)}")
            cursor.move_down(line_height)

        # Itinerary
        if itinerary_text:
            lines = [line.strip() for line in sanitize_text(itinerary_text).split("\n")]
            self._subtitle(cursor, ITINERARY_HEADING)
            for line in lines:
                if line:
                    self._body_line(cursor, line)

        return cursor.document

    def _subtitle(self, cursor: _PageCursor, text: str):
        cursor.ensure_room(2)
        cursor.draw(text, FontRole.BOLD_SUBTITLE, self.layout.subtitle_size)
        cursor.move_down(self.layout.line_height * 1.5)

    def _body_line(self, cursor: _PageCursor, text: str):
        cursor.ensure_room(1)
        cursor.draw(text, FontRole.BODY, self.layout.body_size)
        cursor.move_down(self.layout.line_height)
