"""
Module: extractor.text

Purpose:
    Convert uploaded document bytes to plain text for segmentation.
    PDFs are read with PyMuPDF, Word documents with python-docx.

Key Functions:
    - extract_text(): Dispatch on DocumentType
    - pdf_text(): All page text from a PDF
    - docx_text(): Paragraph and table text from a DOCX, in body order

Dependencies:
    - fitz (PyMuPDF): PDF text extraction
    - docx (python-docx): DOCX text extraction

Used By:
    - admin.service: Document processing
    - cli: Dry-run extraction
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import List, Union

import docx
import fitz
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from poll_toolkit.core.models.documents import DocumentType
from poll_toolkit.errors import TextExtractionError

logger = logging.getLogger(__name__)


def extract_text(data: bytes, file_type: Union[DocumentType, str]) -> str:
    """
    Extract text from document bytes.

    Args:
        data: Raw file bytes
        file_type: DocumentType.PDF or DocumentType.DOCX

    Returns:
        Extracted text, lines separated by newlines

    Raises:
        TextExtractionError: If the type is unsupported or the file is unreadable
    """
    try:
        file_type = DocumentType(file_type)
    except ValueError:
        raise TextExtractionError(f"Unsupported document type: {file_type!r}") from None

    if file_type is DocumentType.PDF:
        return pdf_text(data)
    return docx_text(data)


def pdf_text(data: bytes) -> str:
    """Concatenate the text of every page in a PDF."""
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            pages = [page.get_text("text") for page in doc]
    except (RuntimeError, ValueError) as e:
        raise TextExtractionError(f"Could not read PDF: {e}") from e

    logger.debug(f"Extracted text from {len(pages)} PDF page(s)")
    return "\n".join(pages)


def docx_text(data: bytes) -> str:
    """Read paragraph and table-cell text from a DOCX in document order."""
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise TextExtractionError(f"Could not read DOCX: {e}") from e

    lines: List[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    lines.extend(p.text for p in cell.paragraphs)
        else:
            lines.append(block.text)

    logger.debug(f"Extracted {len(lines)} DOCX line(s)")
    return "\n".join(lines)
