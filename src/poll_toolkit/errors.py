"""
Module: errors

Purpose:
    Exception hierarchy shared by the extractor, storage, admin and
    builder packages. Every error raised on purpose by the toolkit derives
    from PollToolkitError so callers (CLI, services) can catch one type.

Used By:
    - extractor.pipeline / extractor.text: extraction failures
    - storage: persistence failures
    - admin.service: document workflow failures
"""

from __future__ import annotations


class PollToolkitError(Exception):
    """Base class for all toolkit errors."""


class AuthorizationError(PollToolkitError):
    """Raised when the admin password is missing or wrong."""


class DocumentFetchError(PollToolkitError):
    """Raised when a stored document's bytes cannot be retrieved."""


class TextExtractionError(PollToolkitError):
    """Raised when a document cannot be converted to text."""


class ExtractionError(PollToolkitError):
    """Raised when question extraction fails."""


class NoQuestionsFoundError(ExtractionError):
    """Raised when a document yields zero valid questions."""

    def __init__(self, message: str = "No questions found in document"):
        super().__init__(message)


class StorageError(PollToolkitError):
    """Raised when a snapshot cannot be read or written."""


class ConcurrentModificationError(StorageError):
    """Raised when a snapshot changed between read and conditional write."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Snapshot version changed (expected {expected}, found {actual})"
        )
        self.expected = expected
        self.actual = actual


class DocumentNotFoundError(PollToolkitError):
    """Raised when a document id is unknown."""

    def __init__(self, document_id: str):
        super().__init__("Document not found")
        self.document_id = document_id


class DocumentStateError(PollToolkitError):
    """Raised when a document is in the wrong state for an operation."""


class UnsupportedFileTypeError(PollToolkitError):
    """Raised when an upload is neither DOCX nor PDF."""


class ProcessingError(PollToolkitError):
    """Raised by the processing boundary after the document was marked as failed."""

    def __init__(self, document_id: str, message: str):
        super().__init__(message)
        self.document_id = document_id


class ExportError(PollToolkitError):
    """Raised when a questionnaire cannot be exported."""
