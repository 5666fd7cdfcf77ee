"""
Module: builder.output.docx_writer

Purpose:
    Write a questionnaire template as a Word document: centred title,
    race subtitle, divider, then numbered questions each followed by a
    small category tag.

Key Functions:
    - write_docx(): Main entry point

Dependencies:
    - docx (python-docx): Word document generation
    - builder.variables: Placeholder substitution

Used By:
    - builder.controller: export_template(fmt="docx")
"""

from __future__ import annotations

import logging
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from poll_toolkit.builder.template import QuestionnaireTemplate, RaceConfig
from poll_toolkit.builder.variables import replace_variables

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Poll Instrument"

TITLE_SIZE = Pt(16)
SUBTITLE_SIZE = Pt(11)
QUESTION_SIZE = Pt(12)
TAG_SIZE = Pt(9)
SUBTITLE_COLOR = RGBColor(0x66, 0x66, 0x66)
TAG_COLOR = RGBColor(0x99, 0x99, 0x99)
DIVIDER_COLOR = "CCCCCC"


def subtitle_text(config: RaceConfig) -> str:
    """Join the non-empty race details with " | "."""
    parts = [config.district, config.election_date, config.party.value]
    return " | ".join(p for p in parts if p)


def write_docx(template: QuestionnaireTemplate, output_path: Path) -> Path:
    """
    Render a template to a .docx file.

    Args:
        template: Questionnaire with its race configuration
        output_path: Destination file (parent directories are created)

    Returns:
        output_path
    """
    config = template.config
    document = Document()

    title = document.add_paragraph(style="Heading 1")
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title.paragraph_format.space_after = Pt(10)
    run = title.add_run(config.race_name or DEFAULT_TITLE)
    run.bold = True
    run.font.size = TITLE_SIZE

    subtitle = document.add_paragraph()
    subtitle.alignment = WD_ALIGN_PARAGRAPH.CENTER
    subtitle.paragraph_format.space_after = Pt(20)
    run = subtitle.add_run(subtitle_text(config))
    run.italic = True
    run.font.size = SUBTITLE_SIZE
    run.font.color.rgb = SUBTITLE_COLOR

    divider = document.add_paragraph()
    divider.paragraph_format.space_after = Pt(20)
    _add_bottom_border(divider)

    for number, item in enumerate(template.questions, start=1):
        paragraph = document.add_paragraph()
        paragraph.paragraph_format.space_before = Pt(15)
        paragraph.paragraph_format.space_after = Pt(10)
        label = paragraph.add_run(f"Q{number}: ")
        label.bold = True
        label.font.size = QUESTION_SIZE
        body = paragraph.add_run(replace_variables(item.display_text, config))
        body.font.size = QUESTION_SIZE

        tag = document.add_paragraph()
        tag.paragraph_format.space_after = Pt(15)
        run = tag.add_run(f"[{item.question.category.value.upper()}]")
        run.italic = True
        run.font.size = TAG_SIZE
        run.font.color.rgb = TAG_COLOR

    output_path.parent.mkdir(parents=True, exist_ok=True)
    document.save(str(output_path))

    logger.info(f"Wrote {len(template)} questions to {output_path}")
    return output_path


def _add_bottom_border(paragraph) -> None:
    """Give a paragraph a thin single bottom border (python-docx has no API for it)."""
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), DIVIDER_COLOR)
    borders.append(bottom)
    p_pr.append(borders)
