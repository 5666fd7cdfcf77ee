"""
Module: storage.document_store

Purpose:
    Persist uploaded document metadata (documents.json) as one JSON list,
    using the same whole-snapshot, exclusively locked write discipline as
    the library store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, List

from poll_toolkit.core.models.documents import DocumentMetadata
from poll_toolkit.core.schemas.validator import ValidationError, validate_documents
from poll_toolkit.errors import DocumentNotFoundError, StorageError
from .file_locking import locked_read_json, locked_read_modify_write_json

logger = logging.getLogger(__name__)


class DocumentStore:
    """JSON list store for DocumentMetadata records."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> List[DocumentMetadata]:
        return self._to_documents(locked_read_json(self.path, default=list))

    def save(self, documents: List[DocumentMetadata]) -> None:
        """Replace the whole document list."""
        payload = [d.to_dict() for d in documents]
        locked_read_modify_write_json(self.path, lambda _: payload, default=list)

    def get(self, document_id: str) -> DocumentMetadata:
        for doc in self.load():
            if doc.id == document_id:
                return doc
        raise DocumentNotFoundError(document_id)

    def upsert(self, document: DocumentMetadata) -> DocumentMetadata:
        """Replace the record with the same id in place, or append it."""
        def _upsert(documents: List[DocumentMetadata]) -> List[DocumentMetadata]:
            for i, existing in enumerate(documents):
                if existing.id == document.id:
                    documents[i] = document
                    return documents
            documents.append(document)
            return documents

        self.update(_upsert)
        return document

    def remove(self, document_id: str) -> DocumentMetadata:
        """
        Remove a record.

        Raises:
            DocumentNotFoundError: If no record has this id
        """
        removed: List[DocumentMetadata] = []

        def _remove(documents: List[DocumentMetadata]) -> List[DocumentMetadata]:
            kept = [d for d in documents if d.id != document_id]
            if len(kept) == len(documents):
                raise DocumentNotFoundError(document_id)
            removed.extend(d for d in documents if d.id == document_id)
            return kept

        self.update(_remove)
        return removed[0]

    def update(
        self,
        modifier: Callable[[List[DocumentMetadata]], List[DocumentMetadata]],
    ) -> List[DocumentMetadata]:
        """Apply `modifier` to the current list under the exclusive lock."""
        result: List[DocumentMetadata] = []

        def _modify(data: Any) -> list:
            documents = modifier(self._to_documents(data))
            result.extend(documents)
            return [d.to_dict() for d in documents]

        locked_read_modify_write_json(self.path, _modify, default=list)
        return result

    def _to_documents(self, data: Any) -> List[DocumentMetadata]:
        try:
            validate_documents(data)
        except ValidationError as e:
            raise StorageError(f"Invalid document list {self.path.name}: {e}") from e
        return [DocumentMetadata.from_dict(d) for d in data]
