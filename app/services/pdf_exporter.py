"""
PDF Exporter - Encodes a RenderedDocument as PDF bytes with reportlab.
"""
from io import BytesIO
import logging

from reportlab.pdfgen import canvas

from ..errors import ExportError
from ..models.document import FontRole, RenderedDocument

logger = logging.getLogger(__name__)


FONT_NAMES = {
    FontRole.BODY: "Times-Roman",
    FontRole.BOLD_TITLE: "Times-Bold",
    FontRole.BOLD_SUBTITLE: "Times-Bold",
}


class PdfExporter:
    """Draws every text run at its position, one PDF page per rendered page."""

    def __init__(self, title: str = "Travel Itinerary"):
        self.title = title

    def encode(self, document: RenderedDocument) -> bytes:
        """
        Serialize the document.

        Raises:
            ExportError: if reportlab fails for any reason
        """
        try:
            return self._draw(document)
        except Exception as e:
            logger.exception(f"PDF export failed: {e}")
            raise ExportError() from e

    def _draw(self, document: RenderedDocument) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer)
        pdf.setTitle(self.title)

        for page in document.pages:
            pdf.setPageSize((page.width, page.height))
            for run in page.runs:
                pdf.setFont(FONT_NAMES[run.role], run.size)
                pdf.setFillColorRGB(*run.color)
                pdf.drawString(run.x, run.y, run.text)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()
