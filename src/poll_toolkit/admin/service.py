"""
Module: admin.service

Purpose:
    Administrator workflow for source documents: upload, list, delete and
    process. Processing runs the full pipeline for one document
    (fetch → text → extract → merge) and records the outcome on the
    document's status.

Key Classes:
    - AdminService: Workflow entry points
    - ProcessResult: Outcome of a successful processing run

Key Functions:
    - create_service(): Build a service over the local workspace

Error handling:
    Every failure inside process() is caught at the processing boundary,
    written to the document as status=error with its message, logged, and
    re-raised as ProcessingError chained to the cause. Nothing is retried.
"""

from __future__ import annotations

import hmac
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional

from poll_toolkit.config import Settings
from poll_toolkit.core.models.documents import (
    DocumentMetadata,
    DocumentStatus,
    DocumentType,
    utc_timestamp,
)
from poll_toolkit.core.models.library import QuestionLibrary
from poll_toolkit.errors import (
    AuthorizationError,
    DocumentFetchError,
    DocumentStateError,
    ProcessingError,
    UnsupportedFileTypeError,
)
from poll_toolkit.extractor.pipeline import extract_questions, merge_into_library
from poll_toolkit.extractor.text import extract_text
from poll_toolkit.storage.blobs import BlobStore, LocalBlobStore
from poll_toolkit.storage.document_store import DocumentStore
from poll_toolkit.storage.library_store import LibraryStore

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"
ALLOWED_MIME_TYPES = (DOCX_MIME_TYPE, PDF_MIME_TYPE)


@dataclass(frozen=True)
class ProcessResult:
    """
    Result of processing one document.

    Attributes:
        document: Updated metadata (status done)
        questions_added: Questions extracted from the document
        questions_replaced: Questions from an earlier run that were dropped
        total_questions: Library size after the merge
    """
    document: DocumentMetadata
    questions_added: int
    questions_replaced: int
    total_questions: int


class AdminService:
    """
    Document upload and processing service.

    Example:
        >>> service = create_service(Settings.from_env())
        >>> service.authorize("Bearer s3cret")
        >>> doc = service.upload("March Poll.docx", data, DOCX_MIME_TYPE)
        >>> result = service.process(doc.id)
        >>> result.questions_added
        42
    """

    def __init__(
        self,
        settings: Settings,
        blobs: BlobStore,
        documents: DocumentStore,
        library: LibraryStore,
    ) -> None:
        self.settings = settings
        self.blobs = blobs
        self.documents = documents
        self.library = library

    def authorize(self, authorization: Optional[str]) -> None:
        """
        Check an Authorization header against the admin password.

        Raises:
            AuthorizationError: If no password is configured or the header
                is not exactly "Bearer <password>"
        """
        password = self.settings.admin_password
        if not password or authorization is None:
            raise AuthorizationError("Unauthorized")
        expected = f"Bearer {password}".encode("utf-8")
        if not hmac.compare_digest(authorization.encode("utf-8"), expected):
            raise AuthorizationError("Unauthorized")

    def upload(self, file_name: str, data: bytes, content_type: str) -> DocumentMetadata:
        """
        Store an uploaded file and register it as pending.

        Raises:
            UnsupportedFileTypeError: If content_type is not DOCX or PDF
        """
        if content_type not in ALLOWED_MIME_TYPES:
            raise UnsupportedFileTypeError("Invalid file type. Only .docx and .pdf allowed")

        url = self.blobs.put(f"documents/{file_name}", data)
        document = DocumentMetadata(
            id=str(uuid.uuid4()),
            name=file_name,
            url=url,
            uploaded_at=utc_timestamp(),
            status=DocumentStatus.PENDING,
            type=DocumentType.PDF if "pdf" in content_type else DocumentType.DOCX,
        )
        self.documents.upsert(document)

        logger.info(f"Uploaded {file_name} as {document.id}")
        return document

    def list_documents(self) -> List[DocumentMetadata]:
        return self.documents.load()

    def questions(self) -> QuestionLibrary:
        return self.library.load()

    def delete(self, document_id: str, *, purge_questions: bool = False) -> DocumentMetadata:
        """
        Delete a document's file and metadata.

        Questions already merged from the document stay in the library
        unless purge_questions is set.

        Raises:
            DocumentNotFoundError: If the id is unknown
        """
        document = self.documents.get(document_id)

        try:
            if not self.blobs.delete(document.url):
                logger.warning(f"Blob for {document.name} was already deleted")
        except (DocumentFetchError, OSError) as e:
            logger.warning(f"Could not delete blob for {document.name}: {e}")

        self.documents.remove(document_id)

        if purge_questions:
            source = document.source_name
            self.library.update(lambda lib: lib.remove_source(source))
            logger.info(f"Removed questions from {source!r}")

        logger.info(f"Deleted document {document.name} ({document_id})")
        return document

    def process(self, document_id: str, *, force: bool = False) -> ProcessResult:
        """
        Run the extraction pipeline for one document.

        Pipeline:
        1. Mark the document as processing
        2. Fetch its bytes from the blob store
        3. Extract text for its file type
        4. Extract questions (empty result is an error)
        5. Merge into the library, replacing this source's questions
        6. Mark the document as done with the question count

        Args:
            document_id: Document to process
            force: Also process a document currently marked processing
                (e.g. after a crashed run)

        Returns:
            ProcessResult with counts

        Raises:
            DocumentNotFoundError: If the id is unknown
            DocumentStateError: If the document is already processing
            ProcessingError: If any pipeline step failed; the document is
                left with status error and the failure message
        """
        document = self.documents.get(document_id)
        if document.status is DocumentStatus.PROCESSING and not force:
            raise DocumentStateError(f"Document {document.name} is already processing")

        self._record(document.mark_processing())
        logger.info(f"Processing {document.name} ({document.type.value})")

        try:
            data = self.blobs.get(document.url)
            text = extract_text(data, document.type)
            source = document.source_name
            questions = extract_questions(text, source, config=self.settings.extraction)
            merge = merge_into_library(self.library, source, questions)
        except Exception as e:
            message = str(e) or "Processing failed"
            logger.error(
                f"Processing failed for {document.name}: {message}",
                extra={"document_id": document_id, "error": message},
            )
            self._record(document.mark_error(message))
            raise ProcessingError(document_id, message) from e

        done = document.mark_done(merge.questions_added)
        self._record(done)

        return ProcessResult(
            document=done,
            questions_added=merge.questions_added,
            questions_replaced=merge.questions_replaced,
            total_questions=merge.total_questions,
        )

    def reprocess(self, document_id: str) -> ProcessResult:
        """Process a pending or failed document again."""
        return self.process(document_id)

    def _record(self, document: DocumentMetadata) -> None:
        """Overwrite a document's stored record, unless it was deleted meanwhile."""
        def _replace(documents: List[DocumentMetadata]) -> List[DocumentMetadata]:
            replaced = [document if d.id == document.id else d for d in documents]
            if not any(d.id == document.id for d in documents):
                logger.warning(f"Document {document.id} vanished during processing")
            return replaced

        self.documents.update(_replace)


def create_service(settings: Settings) -> AdminService:
    """Build an AdminService over the settings' data directory."""
    return AdminService(
        settings,
        blobs=LocalBlobStore(settings.blobs_dir),
        documents=DocumentStore(settings.documents_path),
        library=LibraryStore(settings.library_path, settings.seed_questions_path),
    )
