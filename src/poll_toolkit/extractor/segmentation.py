"""
Module: extractor.segmentation

Purpose:
    Split raw document text into question blocks at line-start markers
    ("Q1:", "2.", "SCREEN:", "DEMOGRAPHICS:") and trim each block down to
    its question prompt, dropping the response options that follow it.

Key Functions:
    - segment_text(): Pair each marker with the text up to the next marker
    - trim_question_text(): Keep prompt lines up to the first response option

Key Classes:
    - Segment: Immutable (marker, content) pair

Notes:
    Markers and segments are paired by position. When the two counts
    disagree only the overlapping prefix is returned; a trailing unmatched
    fragment is dropped without error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

# `^` without MULTILINE: only the very start of the text, later markers
# must follow a newline.
MARKER_RE = re.compile(
    r"(?:^|\n)\s*(?:Q?\d+[.:]\s*|SCREEN[.:]\s*|DEMOGRAPHICS?[.:]\s*)",
    re.IGNORECASE,
)

RESPONSE_OPTION_RE = re.compile(
    r"^(?:Yes|No|Undecided|Not sure|Favorable|Unfavorable|Very|Somewhat"
    r"|Strongly|More likely|Less likely)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Segment:
    """
    One marker and the raw text that follows it.

    Attributes:
        marker: Marker text with surrounding whitespace removed, e.g. "Q1:"
        content: Raw block text (unstripped) up to the next marker
    """
    marker: str
    content: str


def segment_text(text: str) -> List[Segment]:
    """
    Split text into ordered (marker, content) segments.

    Text before the first marker is ignored.

    Args:
        text: Raw extracted document text

    Returns:
        Segments in document order

    Example:
        >>> [s.marker for s in segment_text("Q1: First?\\nQ2: Second?")]
        ['Q1:', 'Q2:']
    """
    markers = MARKER_RE.findall(text)
    parts = MARKER_RE.split(text)

    count = min(len(markers), len(parts) - 1)
    if count != len(markers):
        logger.debug(f"Dropping {len(markers) - count} unmatched marker(s)")

    return [
        Segment(marker=markers[i].strip(), content=parts[i + 1])
        for i in range(count)
    ]


def trim_question_text(content: str) -> str:
    """
    Reduce a block to its question prompt.

    Non-empty lines are collected until the first line that starts with a
    response option ("Yes", "Strongly", "More likely", ...). Collected
    lines are joined with single spaces.

    Example:
        >>> trim_question_text("Do you support the policy?\\nYes\\nNo\\nUndecided")
        'Do you support the policy?'
    """
    question_lines: List[str] = []
    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue
        if RESPONSE_OPTION_RE.match(trimmed):
            break
        question_lines.append(trimmed)
    return " ".join(question_lines).strip()
