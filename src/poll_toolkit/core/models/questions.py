"""
Module: questions

Purpose:
    Provides the Question dataclass - the record produced by the extractor
    and consumed by the library and the questionnaire builder - together
    with the closed Category enumeration.

Key Classes:
    - Category: Closed set of question categories
    - Question: Immutable classified question

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - extractor.pipeline: Builds Question records
    - core.models.library: Library snapshot
    - builder.template: Questionnaire templates
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """
    Question category tag.

    Declaration order is the classifier's match order; OTHER is the
    fallback and has no patterns.
    """
    SCREENER = "screener"
    FAVORABILITY = "favorability"
    JOB_APPROVAL = "job_approval"
    TOP_OF_BALLOT = "top_of_ballot"
    PERSUASION = "persuasion"
    POLICY = "policy"
    ISSUE = "issue"
    DEMOGRAPHICS = "demographics"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human readable label, e.g. "Job Approval"."""
        return _CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> Category:
        """
        Parse a stored category string.

        Unknown values map to OTHER so a library written by an older
        pattern table still loads.

        Example:
            >>> Category.parse("job_approval")
            <Category.JOB_APPROVAL: 'job_approval'>
            >>> Category.parse("horse_race")
            <Category.OTHER: 'other'>
        """
        try:
            return cls(value)
        except ValueError:
            logger.debug(f"Unknown category {value!r}, using 'other'")
            return cls.OTHER


_CATEGORY_LABELS = {
    Category.SCREENER: "Screener",
    Category.FAVORABILITY: "Favorability",
    Category.JOB_APPROVAL: "Job Approval",
    Category.TOP_OF_BALLOT: "Top of Ballot",
    Category.PERSUASION: "Persuasion",
    Category.POLICY: "Policy",
    Category.ISSUE: "Issue",
    Category.DEMOGRAPHICS: "Demographics",
    Category.OTHER: "Other",
}


@dataclass(frozen=True)
class Question:
    """
    Classified survey question (immutable).

    Attributes:
        id: "{source}_{marker without punctuation}", e.g. "march_poll_Q1"
        text: Cleaned question prompt without response options
        full_text: First characters of the raw block, for reference
        category: Category tag
        source: Document name the question came from (no extension)
        marker: Original block marker without trailing punctuation, e.g. "Q1"

    Example:
        >>> q = Question(
        ...     id="march_poll_Q1",
        ...     text="Do you approve or disapprove of the job the governor is doing?",
        ...     full_text="Do you approve or disapprove of the job ...",
        ...     category=Category.JOB_APPROVAL,
        ...     source="march_poll",
        ...     marker="Q1",
        ... )
    """

    id: str
    text: str
    full_text: str
    category: Category
    source: str
    marker: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must not be empty")
        if not isinstance(self.category, Category):
            raise ValueError(f"category must be a Category: {self.category!r}")

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "text": self.text,
            "full_text": self.full_text,
            "category": self.category.value,
            "source": self.source,
            "marker": self.marker,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """Deserialize from dictionary."""
        return cls(
            id=data["id"],
            text=data["text"],
            full_text=data.get("full_text", data["text"]),
            category=Category.parse(data.get("category", Category.OTHER.value)),
            source=data.get("source", ""),
            marker=data.get("marker", ""),
        )

    def __repr__(self) -> str:
        return f"Question({self.id!r}, category={self.category.value})"
