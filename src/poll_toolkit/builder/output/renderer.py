"""
Module: builder.output.renderer

Purpose:
    Render a questionnaire template to PDF using ReportLab, with the same
    layout as the Word export: centred title and subtitle, divider rule,
    numbered questions with a hanging indent and grey category tags.
    Text is wrapped to the content width and flows onto new pages.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - builder.variables: Placeholder substitution

Used By:
    - builder.controller: export_template(fmt="pdf")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from poll_toolkit.builder.output.docx_writer import DEFAULT_TITLE, subtitle_text
from poll_toolkit.builder.template import QuestionnaireTemplate
from poll_toolkit.builder.variables import replace_variables

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH_PT, A4_HEIGHT_PT = A4
MARGIN_PT = 56

TITLE_FONT = ("Helvetica-Bold", 16)
SUBTITLE_FONT = ("Helvetica-Oblique", 11)
LABEL_FONT = ("Helvetica-Bold", 12)
BODY_FONT = ("Helvetica", 12)
TAG_FONT = ("Helvetica-Oblique", 9)
LINE_SPACING = 1.3

FOOTER_FONT_SIZE = 7


def _get_footer_text() -> str:
    """Get footer text with current version number."""
    from poll_toolkit import __version__
    return f"Generated with Poll Toolkit v{__version__}"


class _PageCursor:
    """Tracks the vertical write position and starts new pages when full."""

    def __init__(self, c: canvas.Canvas, show_footer: bool) -> None:
        self.c = c
        self.show_footer = show_footer
        self.y = A4_HEIGHT_PT - MARGIN_PT
        self.page_count = 1

    def ensure(self, height: float) -> None:
        if self.y - height < MARGIN_PT:
            self.new_page()

    def new_page(self) -> None:
        self.finish_page()
        self.c.showPage()
        self.page_count += 1
        self.y = A4_HEIGHT_PT - MARGIN_PT

    def finish_page(self) -> None:
        if self.show_footer:
            _draw_footer(self.c)


def render_to_pdf(
    template: QuestionnaireTemplate,
    output_path: Path,
    *,
    show_footer: bool = True,
) -> int:
    """
    Render a template to a PDF file.

    Args:
        template: Questionnaire with its race configuration
        output_path: Path to write PDF
        show_footer: Draw the version footer on each page

    Returns:
        Number of pages written

    Raises:
        IOError: If PDF cannot be written

    Example:
        >>> render_to_pdf(template, Path("output/Poll_Instrument.pdf"))
        2
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    config = template.config
    content_width = A4_WIDTH_PT - 2 * MARGIN_PT

    c = canvas.Canvas(str(output_path), pagesize=A4)
    c.setTitle(config.race_name or DEFAULT_TITLE)
    cursor = _PageCursor(c, show_footer)

    _draw_centered(c, cursor, config.race_name or DEFAULT_TITLE, TITLE_FONT, space_after=10)
    _draw_centered(c, cursor, subtitle_text(config), SUBTITLE_FONT, space_after=20,
                   color=(0.4, 0.4, 0.4))

    c.saveState()
    c.setStrokeColorRGB(0.8, 0.8, 0.8)
    c.setLineWidth(0.75)
    c.line(MARGIN_PT, cursor.y, A4_WIDTH_PT - MARGIN_PT, cursor.y)
    c.restoreState()
    cursor.y -= 20

    for number, item in enumerate(template.questions, start=1):
        label = f"Q{number}: "
        indent = c.stringWidth(label, *LABEL_FONT)
        text = replace_variables(item.display_text, config)
        lines = simpleSplit(text, BODY_FONT[0], BODY_FONT[1], content_width - indent) or [""]

        cursor.y -= 15
        _draw_question(c, cursor, label, indent, lines)

        tag_height = TAG_FONT[1] * LINE_SPACING
        cursor.ensure(tag_height)
        cursor.y -= tag_height
        c.saveState()
        c.setFont(*TAG_FONT)
        c.setFillColorRGB(0.6, 0.6, 0.6)
        c.drawString(MARGIN_PT, cursor.y, f"[{item.question.category.value.upper()}]")
        c.restoreState()
        cursor.y -= 15

    cursor.finish_page()
    c.save()

    logger.info(f"Rendered {len(template)} questions on {cursor.page_count} pages to {output_path}")
    return cursor.page_count


def _draw_centered(
    c: canvas.Canvas,
    cursor: _PageCursor,
    text: str,
    font: tuple,
    *,
    space_after: float,
    color: tuple = (0, 0, 0),
) -> None:
    line_height = font[1] * LINE_SPACING
    for line in simpleSplit(text, font[0], font[1], A4_WIDTH_PT - 2 * MARGIN_PT):
        cursor.ensure(line_height)
        cursor.y -= line_height
        c.saveState()
        c.setFont(*font)
        c.setFillColorRGB(*color)
        c.drawCentredString(A4_WIDTH_PT / 2, cursor.y, line)
        c.restoreState()
    cursor.y -= space_after


def _draw_question(
    c: canvas.Canvas,
    cursor: _PageCursor,
    label: str,
    indent: float,
    lines: List[str],
) -> None:
    """Draw the bold label and the wrapped body with a hanging indent."""
    line_height = BODY_FONT[1] * LINE_SPACING
    for i, line in enumerate(lines):
        cursor.ensure(line_height)
        cursor.y -= line_height
        if i == 0:
            c.setFont(*LABEL_FONT)
            c.drawString(MARGIN_PT, cursor.y, label)
        c.setFont(*BODY_FONT)
        c.drawString(MARGIN_PT + indent, cursor.y, line)
    cursor.y -= 10


def _draw_footer(c: canvas.Canvas) -> None:
    """Draw centered footer 15pt from the page bottom."""
    footer_text = _get_footer_text()

    c.saveState()
    c.setFont("Helvetica", FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    text_width = c.stringWidth(footer_text, "Helvetica", FOOTER_FONT_SIZE)
    c.drawString((A4_WIDTH_PT - text_width) / 2, 15, footer_text)
    c.restoreState()
