"""
PDF report rendering with reportlab.

Text is placed top to bottom: a centered title, then numbered lines. Lines
wider than the page are wrapped and a new page starts when the current one
is full.
"""

from pathlib import Path
from typing import Sequence

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from posts_pipeline.core.errors import RenderError
from posts_pipeline.core.models import Report
from posts_pipeline.observability.logger import get_logger


logger = get_logger(__name__)


class PdfReportRenderer:
    """
    Renders a title and numbered text lines to a PDF file.
    """

    FONT_NAME = "Helvetica"
    TITLE_FONT_SIZE = 16
    LINE_FONT_SIZE = 12
    LEADING = 1.2  # line height as a multiple of font size

    def __init__(self, page_size: tuple[float, float] = LETTER, margin: float = 72.0):
        """
        Initialize renderer.

        Args:
            page_size: Page width and height in points
            margin: Page margin in points
        """
        self.page_size = page_size
        self.margin = margin

    def render_report(self, report: Report) -> int:
        return self.render(report.title, report.lines, report.output_path)

    def render(self, title: str, lines: Sequence[str], output_path: str | Path) -> int:
        """
        Write a report, replacing any existing file at ``output_path``.

        Args:
            title: Report title
            lines: Text lines, numbered from 1 in the output
            output_path: Destination file; parent directories are created

        Returns:
            Number of pages written

        Raises:
            RenderError: If the file cannot be written
        """
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            pdf = canvas.Canvas(str(path), pagesize=self.page_size)
            pdf.setTitle(title)
            self._draw(pdf, title, lines)
            page_count = pdf.getPageNumber()
            pdf.save()
        except OSError as e:
            raise RenderError(str(path), e.strerror or str(e)) from e

        logger.info(f"PDF written: {path} ({page_count} pages)")
        return page_count

    def _draw(self, pdf: canvas.Canvas, title: str, lines: Sequence[str]) -> None:
        width, height = self.page_size
        text_width = width - 2 * self.margin
        line_height = self.LINE_FONT_SIZE * self.LEADING

        y = height - self.margin - self.TITLE_FONT_SIZE
        pdf.setFont(self.FONT_NAME, self.TITLE_FONT_SIZE)
        for part in simpleSplit(title, self.FONT_NAME, self.TITLE_FONT_SIZE, text_width):
            pdf.drawCentredString(width / 2, y, part)
            y -= self.TITLE_FONT_SIZE * self.LEADING
        # two blank lines below the title
        y -= 2 * line_height

        pdf.setFont(self.FONT_NAME, self.LINE_FONT_SIZE)
        for number, line in enumerate(lines, start=1):
            wrapped = simpleSplit(f"{number}. {line}", self.FONT_NAME, self.LINE_FONT_SIZE, text_width)
            for part in wrapped:
                if y < self.margin:
                    pdf.showPage()
                    pdf.setFont(self.FONT_NAME, self.LINE_FONT_SIZE)
                    y = height - self.margin - self.LINE_FONT_SIZE
                pdf.drawString(self.margin, y, part)
                y -= line_height
            # half a line between entries
            y -= line_height / 2
