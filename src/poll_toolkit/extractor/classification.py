"""
Module: extractor.classification

Purpose:
    Category classification for extracted question text using the ordered
    regex pattern table. Linear first-match policy: a question receives
    exactly one category, and text matching nothing is OTHER.

Key Functions:
    - classify_question(): Main entry point
    - matching_categories(): Every category whose patterns match (diagnostics)

Dependencies:
    - poll_toolkit.extractor.patterns: Pattern table
"""

from __future__ import annotations

import logging
from typing import List, Optional

from poll_toolkit.core.models.questions import Category
from .patterns import CompiledTable, compiled_patterns

logger = logging.getLogger(__name__)


def classify_question(text: str, table: Optional[CompiledTable] = None) -> Category:
    """
    Classify question text into a category.

    Args:
        text: Cleaned question text
        table: Compiled pattern table (defaults to the built-in table)

    Returns:
        First category in table order with a matching pattern, else OTHER

    Example:
        >>> classify_question("Do you approve or disapprove of the job Joe Smith is doing?")
        <Category.JOB_APPROVAL: 'job_approval'>
        >>> classify_question("Anything else to add?")
        <Category.OTHER: 'other'>
    """
    if table is None:
        table = compiled_patterns()
    text_lower = text.lower()

    for category, patterns in table:
        for pattern in patterns:
            if pattern.search(text_lower):
                logger.debug(f"Classified as {category.value} via {pattern.pattern!r}")
                return category

    return Category.OTHER


def matching_categories(text: str, table: Optional[CompiledTable] = None) -> List[Category]:
    """
    List every category with at least one matching pattern, in table order.

    Used to inspect overlaps between categories; classify_question() only
    ever returns the first element.
    """
    if table is None:
        table = compiled_patterns()
    text_lower = text.lower()
    return [
        category
        for category, patterns in table
        if any(p.search(text_lower) for p in patterns)
    ]
