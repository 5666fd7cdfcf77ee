"""
Module: builder.controller

Purpose:
    Export a questionnaire template to a file.
    Validate → name the file → write DOCX or render PDF.

Key Functions:
    - export_template(): Main entry point
    - export_filename(): Default file name for a race

Key Classes:
    - ExportResult: Path and counts of a finished export
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from poll_toolkit.errors import ExportError
from .output.docx_writer import write_docx
from .output.renderer import render_to_pdf
from .template import QuestionnaireTemplate, RaceConfig

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("docx", "pdf")
_WHITESPACE_RE = re.compile(r"\s+")
_PATH_SEPARATOR_RE = re.compile(r"[/\\]")


@dataclass(frozen=True)
class ExportResult:
    path: Path
    format: str
    question_count: int


def export_filename(config: RaceConfig, fmt: str = "docx") -> str:
    """
    File name for an exported questionnaire.

    Example:
        >>> export_filename(RaceConfig(race_name="GA SD 18 Special"))
        'GA_SD_18_Special_Poll_Instrument.docx'
        >>> export_filename(RaceConfig(race_name="../../etc"))
        '.._.._etc_Poll_Instrument.docx'
        >>> export_filename(RaceConfig(), "pdf")
        'Poll_Instrument.pdf'
    """
    if config.race_name:
        slug = _WHITESPACE_RE.sub("_", config.race_name)
        slug = _PATH_SEPARATOR_RE.sub("_", slug)
        return f"{slug}_Poll_Instrument.{fmt}"
    return f"Poll_Instrument.{fmt}"


def export_template(
    template: QuestionnaireTemplate,
    output_dir: Path,
    fmt: str = "docx",
) -> ExportResult:
    """
    Export a questionnaire to `output_dir`.

    Args:
        template: Questionnaire to export
        output_dir: Destination directory (created if needed)
        fmt: "docx" or "pdf"

    Returns:
        ExportResult with the written path

    Raises:
        ExportError: If the template is empty, the format is unknown or
            the file cannot be written
    """
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unknown export format {fmt!r} (expected one of {EXPORT_FORMATS})")
    if not len(template):
        raise ExportError("Template has no questions")

    output_path = output_dir / export_filename(template.config, fmt)
    try:
        if fmt == "docx":
            write_docx(template, output_path)
        else:
            render_to_pdf(template, output_path)
    except OSError as e:
        raise ExportError(f"Failed to write {output_path}: {e}") from e

    return ExportResult(path=output_path, format=fmt, question_count=len(template))
