"""
Module: extractor

Purpose:
    Question extraction pipeline: turns raw document text into classified
    Question records and merges them into the question library.

Key Functions:
    - extract_questions(): Main entry point (raises when nothing is found)
    - parse_questions(): Lenient variant returning an empty list
    - classify_question(): Pattern-table classifier
    - segment_text(): Marker-based segmentation
    - extract_text(): PDF/DOCX bytes -> text
    - merge_into_library(): Replace-by-source library merge

Dependencies:
    - fitz (PyMuPDF): PDF text extraction
    - docx (python-docx): DOCX text extraction
"""

from .classification import classify_question
from .patterns import CATEGORY_PATTERNS
from .pipeline import (
    MergeResult,
    extract_questions,
    merge_into_library,
    parse_questions,
    question_id,
)
from .segmentation import Segment, segment_text, trim_question_text
from .text import extract_text

__all__ = [
    "CATEGORY_PATTERNS",
    "MergeResult",
    "Segment",
    "classify_question",
    "extract_questions",
    "extract_text",
    "merge_into_library",
    "parse_questions",
    "question_id",
    "segment_text",
    "trim_question_text",
]
