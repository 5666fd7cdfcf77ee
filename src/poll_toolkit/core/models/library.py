"""
Module: library

Purpose:
    The question library snapshot: ordered questions plus aggregate
    category statistics. The library is always persisted and replaced as
    a whole; every mutation returns a new QuestionLibrary.

Key Classes:
    - LibraryStats: total and per-category counts (always calculated)
    - QuestionLibrary: Immutable ordered question collection

Key Functions:
    - compute_stats(): Aggregate counts for a question list

Used By:
    - extractor.pipeline: Merge policy (replace_source)
    - storage.library_store: Snapshot persistence
    - builder / cli: Browsing and filtering
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .questions import Category, Question
from ..schemas.validator import ValidationError


@dataclass(frozen=True)
class LibraryStats:
    """
    Aggregate library statistics.

    Attributes:
        total_questions: Number of questions in the library
        by_category: Category value -> count, only categories present
    """
    total_questions: int
    by_category: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_questions": self.total_questions,
            "by_category": dict(self.by_category),
        }


def compute_stats(questions: Iterable[Question]) -> LibraryStats:
    """
    Count questions per category.

    Example:
        >>> compute_stats([]).total_questions
        0
    """
    by_category: Dict[str, int] = {}
    total = 0
    for q in questions:
        by_category[q.category.value] = by_category.get(q.category.value, 0) + 1
        total += 1
    return LibraryStats(total_questions=total, by_category=by_category)


@dataclass(frozen=True)
class QuestionLibrary:
    """
    Ordered question collection (immutable).

    Attributes:
        questions: Questions in library order
        version: Snapshot version stamp, incremented on every save
        last_updated: ISO-8601 timestamp of the last save, "" if never saved

    Invariants:
        - Question ids are unique
        - stats is always calculated from questions
    """
    questions: Tuple[Question, ...] = ()
    version: int = 0
    last_updated: str = ""

    def __post_init__(self) -> None:
        seen = set()
        duplicates = []
        for q in self.questions:
            if q.id in seen:
                duplicates.append(q.id)
            seen.add(q.id)
        if duplicates:
            raise ValidationError(
                f"Duplicate question ids: {sorted(set(duplicates))}",
                path="questions",
                errors=[f"Duplicate id: {qid}" for qid in duplicates],
            )

    @property
    def stats(self) -> LibraryStats:
        return compute_stats(self.questions)

    def __len__(self) -> int:
        return len(self.questions)

    def get(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def sources(self) -> List[Tuple[str, int]]:
        """Return (source, question_count) pairs in first-seen order."""
        counts: Dict[str, int] = {}
        for q in self.questions:
            counts[q.source] = counts.get(q.source, 0) + 1
        return list(counts.items())

    def remove_source(self, source: str) -> QuestionLibrary:
        kept = tuple(q for q in self.questions if q.source != source)
        return QuestionLibrary(kept, version=self.version, last_updated=self.last_updated)

    def replace_source(self, source: str, new_questions: Iterable[Question]) -> QuestionLibrary:
        """
        Drop every question from `source`, then append `new_questions`.

        Re-running extraction for the same document therefore never
        duplicates or leaves stale entries.
        """
        kept = [q for q in self.questions if q.source != source]
        kept.extend(new_questions)
        return QuestionLibrary(tuple(kept), version=self.version, last_updated=self.last_updated)

    def filter(
        self,
        categories: Optional[Iterable[Category]] = None,
        query: Optional[str] = None,
    ) -> List[Question]:
        """
        Filter by category membership and a case-insensitive search string.

        Args:
            categories: Keep only these categories (None or empty = all)
            query: Substring matched against question text and source

        Returns:
            Matching questions in library order
        """
        result: List[Question] = list(self.questions)
        wanted = set(categories or ())
        if wanted:
            result = [q for q in result if q.category in wanted]
        if query and query.strip():
            needle = query.strip().lower()
            result = [
                q for q in result
                if needle in q.text.lower() or needle in q.source.lower()
            ]
        return result

    def to_dict(self) -> dict:
        return {
            "categories": {c.value: c.label for c in Category},
            "sources": [
                {"name": name, "question_count": count}
                for name, count in self.sources()
            ],
            "questions": [q.to_dict() for q in self.questions],
            "stats": self.stats.to_dict(),
            "lastUpdated": self.last_updated,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionLibrary:
        return cls(
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
            version=int(data.get("version", 0)),
            last_updated=data.get("lastUpdated", ""),
        )
