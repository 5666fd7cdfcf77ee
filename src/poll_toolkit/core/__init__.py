"""
Poll Toolkit Core Package

Shared data models and schema validation used by the extractor, storage,
admin and builder packages.

All models are frozen dataclasses: lifecycle changes (document status,
library merges) create new instances instead of mutating shared state.
"""

from .models import (
    Category,
    Question,
    DocumentMetadata,
    DocumentStatus,
    DocumentType,
    LibraryStats,
    QuestionLibrary,
)

__all__ = [
    "Category",
    "Question",
    "DocumentMetadata",
    "DocumentStatus",
    "DocumentType",
    "LibraryStats",
    "QuestionLibrary",
]
