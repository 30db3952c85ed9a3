"""
Document models - Paginated, styled layout handed to the PDF exporter.
"""
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


RGB = tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)
MUTED_GRAY: RGB = (0.4, 0.4, 0.4)


class FontRole(str, Enum):
    """Typographic role of a text run."""
    BODY = "body"
    BOLD_TITLE = "bold_title"
    BOLD_SUBTITLE = "bold_subtitle"


class PageLayout(BaseModel):
    """Page geometry and type sizes (A4 in PDF points)."""
    model_config = ConfigDict(frozen=True)

    width: float = 595
    height: float = 842
    margin: float = 50
    title_size: float = 24
    subtitle_size: float = 16
    body_size: float = 12
    line_height_factor: float = 1.5

    @property
    def line_height(self) -> float:
        return self.body_size * self.line_height_factor

    @property
    def top(self) -> float:
        """Baseline of the first line on a page."""
        return self.height - self.margin

    @property
    def usable_height(self) -> float:
        return self.height - 2 * self.margin


class TextRun(BaseModel):
    """A positioned, styled piece of text. `y` is the baseline, measured from the page bottom."""
    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    role: FontRole
    size: float
    color: RGB = BLACK


class Page(BaseModel):
    """A fixed-size page holding text runs in drawing order."""
    width: float
    height: float
    runs: list[TextRun] = Field(default_factory=list)


class RenderedDocument(BaseModel):
    """Ordered pages ready for binary encoding."""
    pages: list[Page] = Field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def all_runs(self) -> list[TextRun]:
        return [run for page in self.pages for run in page.runs]

    def texts(self) -> list[str]:
        return [run.text for run in self.all_runs()]
