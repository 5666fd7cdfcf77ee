"""
Schemas Package

Structural validation of stored JSON snapshots.
"""

from .validator import (
    validate_question,
    validate_library,
    validate_documents,
    ValidationError,
)

__all__ = [
    "validate_question",
    "validate_library",
    "validate_documents",
    "ValidationError",
]
