"""
Module: builder.template

Purpose:
    Questionnaire template state: the race configuration and the ordered
    list of chosen library questions with optional per-question wording
    overrides. Replaces the drag-and-drop builder's in-browser state.

Key Classes:
    - Party: GOP | DEM | General
    - RaceConfig: Race details used for variable substitution
    - TemplateQuestion: A chosen question with its position and override
    - QuestionnaireTemplate: Mutable ordered selection
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from poll_toolkit.core.models.questions import Question


class Party(str, Enum):
    GOP = "GOP"
    DEM = "DEM"
    GENERAL = "General"


@dataclass(frozen=True)
class RaceConfig:
    """
    Race details substituted into question text.

    Attributes:
        race_name: e.g. "GA SD 18 Special Election"; also the export title
        district: District name
        election_date: Free-form election date
        candidates: Candidate names, [CANDIDATE_1] is the first
        party: Party context of the poll
    """
    race_name: str = ""
    district: str = ""
    election_date: str = ""
    candidates: Tuple[str, ...] = ()
    party: Party = Party.GOP

    def __post_init__(self) -> None:
        # Accept lists and plain strings from callers (CLI, JSON)
        object.__setattr__(self, "candidates", tuple(self.candidates))
        object.__setattr__(self, "party", Party(self.party))


@dataclass(frozen=True)
class TemplateQuestion:
    question: Question
    order: int
    custom_text: Optional[str] = None

    @property
    def id(self) -> str:
        return self.question.id

    @property
    def display_text(self) -> str:
        """Custom wording if set, else the library text."""
        return self.custom_text or self.question.text


@dataclass
class QuestionnaireTemplate:
    """
    Ordered question selection.

    Orders are always 0..n-1 in list order; every structural change
    renumbers them.

    Example:
        >>> template = QuestionnaireTemplate()
        >>> template.add(screener)
        True
        >>> template.add(ballot)
        True
        >>> template.move(ballot.id, 0)
        >>> [tq.id for tq in template.questions]
        ['poll_Q2', 'poll_SCREEN']
    """
    config: RaceConfig = field(default_factory=RaceConfig)
    _items: List[Question] = field(default_factory=list, repr=False)
    _custom_texts: Dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def questions(self) -> List[TemplateQuestion]:
        return [
            TemplateQuestion(q, order=i, custom_text=self._custom_texts.get(q.id))
            for i, q in enumerate(self._items)
        ]

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, question_id: str) -> bool:
        return any(q.id == question_id for q in self._items)

    def add(self, question: Question) -> bool:
        """Append a question. Returns False if it is already selected."""
        if self.contains(question.id):
            return False
        self._items.append(question)
        return True

    def remove(self, question_id: str) -> None:
        """Remove a question and forget its custom wording."""
        self._items.pop(self._index(question_id))
        self._custom_texts.pop(question_id, None)

    def move(self, question_id: str, new_index: int) -> None:
        """Move a question to `new_index` (clamped to the list bounds)."""
        item = self._items.pop(self._index(question_id))
        new_index = max(0, min(new_index, len(self._items)))
        self._items.insert(new_index, item)

    def set_custom_text(self, question_id: str, text: Optional[str]) -> None:
        """Override a question's wording; empty or None restores the original."""
        self._index(question_id)
        if text:
            self._custom_texts[question_id] = text
        else:
            self._custom_texts.pop(question_id, None)

    def clear(self) -> None:
        self._items.clear()
        self._custom_texts.clear()

    def _index(self, question_id: str) -> int:
        for i, q in enumerate(self._items):
            if q.id == question_id:
                return i
        raise KeyError(question_id)
