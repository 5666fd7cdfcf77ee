"""
Module: extractor.patterns

Purpose:
    The category pattern table used by the classifier. An ordered tuple of
    (Category, patterns) pairs: the classifier walks it front to back and
    the first category with any matching pattern wins, so the order here
    is part of the classification result.

Key Objects:
    - CATEGORY_PATTERNS: Ordered (Category, raw pattern strings) pairs
    - compiled_patterns(): Same table with compiled, case-insensitive regexes

Used By:
    - extractor.classification: classify_question()
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Tuple

from poll_toolkit.core.models.questions import Category

logger = logging.getLogger(__name__)

PatternTable = Tuple[Tuple[Category, Tuple[str, ...]], ...]

CATEGORY_PATTERNS: PatternTable = (
    (Category.SCREENER, (
        r"do you plan to vote",
        r"will you vote",
        r"are you registered",
        r"screen:",
        r"likely.*voter",
    )),
    (Category.FAVORABILITY, (
        r"what is your opinion of",
        r"favorable.*unfavorable",
        r"do you have a favorable or unfavorable",
    )),
    (Category.JOB_APPROVAL, (
        r"do you approve or disapprove of the job",
        r"job.*doing",
        r"approve.*disapprove.*job",
    )),
    (Category.TOP_OF_BALLOT, (
        r"if the (?:election|primary|caucus) were held today",
        r"for whom would you vote",
        r"who would you (?:vote for|support)",
        r"which candidate",
    )),
    (Category.PERSUASION, (
        r"more likely or less likely",
        r"after hearing this",
        r"would you be more likely",
        r"does this make you",
    )),
    (Category.POLICY, (
        r"do you support or oppose",
        r"do you agree or disagree",
        r"support.*oppose",
    )),
    (Category.ISSUE, (
        r"which of the following best describes",
        r"what do you think about",
        r"how important is",
        r"most important issue",
    )),
    (Category.DEMOGRAPHICS, (
        r"(?:^|\s)(?:party|gender|age|ideology|race|income|education|geography)",
        r"are you a (?:woman|man|male|female)",
        r"which age range",
        r"do you consider yourself.*conservative",
    )),
)

CompiledTable = Tuple[Tuple[Category, Tuple[re.Pattern, ...]], ...]


def compile_table(table: PatternTable) -> CompiledTable:
    """
    Compile a pattern table, preserving category and pattern order.

    Invalid regexes are skipped with a warning rather than disabling the
    whole category.
    """
    compiled: List[Tuple[Category, Tuple[re.Pattern, ...]]] = []
    for category, raw_patterns in table:
        regexes: List[re.Pattern] = []
        for raw in raw_patterns:
            try:
                regexes.append(re.compile(raw, re.IGNORECASE))
            except re.error as e:
                logger.warning(f"Invalid pattern for {category.value}: {raw!r} ({e})")
        compiled.append((category, tuple(regexes)))
    return tuple(compiled)


@lru_cache(maxsize=1)
def compiled_patterns() -> CompiledTable:
    """Compiled form of CATEGORY_PATTERNS (cached)."""
    return compile_table(CATEGORY_PATTERNS)
