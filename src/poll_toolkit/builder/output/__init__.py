"""
Module: builder.output

Purpose:
    Questionnaire export writers.

Key Functions:
    - write_docx(): Word document via python-docx
    - render_to_pdf(): PDF via ReportLab
"""

from .docx_writer import write_docx
from .renderer import render_to_pdf

__all__ = [
    "write_docx",
    "render_to_pdf",
]
