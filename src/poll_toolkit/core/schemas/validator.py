"""
Schema Validation Utilities

Validates the JSON snapshots read back from storage before they are turned
into model objects. Fails fast with a ValidationError naming the offending
field, so a corrupt snapshot is reported instead of half-loaded.
"""

from __future__ import annotations

from typing import Any

_QUESTION_REQUIRED = ("id", "text", "category", "source", "marker")
_DOCUMENT_REQUIRED = ("id", "name", "url", "status", "type")
_DOCUMENT_STATUSES = {"pending", "processing", "done", "error"}
_DOCUMENT_TYPES = {"pdf", "docx"}


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question(data: Any, *, path: str = "") -> None:
    """
    Validate a single question record.

    Args:
        data: Question dictionary
        path: Location used in error messages, e.g. "questions[3]"

    Raises:
        ValidationError: If a required field is missing or not a string
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Question must be an object: {data!r}", path=path)

    missing = [f for f in _QUESTION_REQUIRED if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    for key in _QUESTION_REQUIRED + ("full_text",):
        if key in data and not isinstance(data[key], str):
            raise ValidationError(
                f"Field {key!r} must be a string",
                path=f"{path}.{key}" if path else key,
            )

    if not data["id"]:
        raise ValidationError("Question id must not be empty", path=path)


def validate_library(data: Any) -> None:
    """
    Validate a library snapshot (questions-db.json).

    Raises:
        ValidationError: If the snapshot structure is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Library snapshot must be an object")

    questions = data.get("questions", [])
    if not isinstance(questions, list):
        raise ValidationError("'questions' must be a list", path="questions")

    for i, q in enumerate(questions):
        validate_question(q, path=f"questions[{i}]")

    version = data.get("version", 0)
    if not isinstance(version, int) or version < 0:
        raise ValidationError(f"Invalid version: {version!r}", path="version")


def validate_documents(data: Any) -> None:
    """
    Validate the document metadata list (documents.json).

    Raises:
        ValidationError: If any record is malformed
    """
    if not isinstance(data, list):
        raise ValidationError("Document list must be an array")

    for i, doc in enumerate(data):
        path = f"[{i}]"
        if not isinstance(doc, dict):
            raise ValidationError("Document must be an object", path=path)
        missing = [f for f in _DOCUMENT_REQUIRED if f not in doc]
        if missing:
            raise ValidationError(
                f"Missing required fields: {missing}",
                path=path,
                errors=[f"Missing field: {f}" for f in missing],
            )
        if doc["status"] not in _DOCUMENT_STATUSES:
            raise ValidationError(f"Invalid status: {doc['status']!r}", path=f"{path}.status")
        if doc["type"] not in _DOCUMENT_TYPES:
            raise ValidationError(f"Invalid type: {doc['type']!r}", path=f"{path}.type")
