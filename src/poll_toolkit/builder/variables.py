"""
Module: builder.variables

Purpose:
    Replace race placeholders in question text: [RACE_NAME], [DISTRICT],
    [ELECTION_DATE], [DATE], [PARTY], [CANDIDATE_1] / [CANDIDATE1] ...,
    and [CANDIDATE_NAME] / [CANDIDATE] for the first candidate.
    Placeholders are matched case-insensitively.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .template import RaceConfig


def _sub(pattern: str, value: str, text: str) -> str:
    # Function replacement keeps backslashes in values literal
    return re.sub(pattern, lambda _: value, text, flags=re.IGNORECASE)


def replace_variables(text: str, config: RaceConfig) -> str:
    """
    Substitute race details into text.

    Example:
        >>> cfg = RaceConfig(district="SD 18", candidates=("Ann Lee", "Bo Diaz"))
        >>> replace_variables("[CANDIDATE_2] vs [candidate1] in [DISTRICT]", cfg)
        'Bo Diaz vs Ann Lee in SD 18'
    """
    replacements: List[Tuple[str, str]] = [
        (r"\[RACE_NAME\]", config.race_name),
        (r"\[DISTRICT\]", config.district),
        (r"\[ELECTION_DATE\]", config.election_date),
        (r"\[DATE\]", config.election_date),
        (r"\[PARTY\]", config.party.value),
    ]
    for index, candidate in enumerate(config.candidates, start=1):
        replacements.append((rf"\[CANDIDATE_{index}\]", candidate))
        replacements.append((rf"\[CANDIDATE{index}\]", candidate))
    if config.candidates:
        replacements.append((r"\[CANDIDATE_NAME\]", config.candidates[0]))
        replacements.append((r"\[CANDIDATE\]", config.candidates[0]))

    result = text
    for pattern, value in replacements:
        result = _sub(pattern, value, result)
    return result
