"""
Core Models Package

Immutable data models for questions, uploaded documents and the question
library snapshot.
"""

from .questions import Category, Question
from .documents import DocumentMetadata, DocumentStatus, DocumentType
from .library import LibraryStats, QuestionLibrary

__all__ = [
    "Category",
    "Question",
    "DocumentMetadata",
    "DocumentStatus",
    "DocumentType",
    "LibraryStats",
    "QuestionLibrary",
]
