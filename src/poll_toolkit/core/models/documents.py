"""
Module: documents

Purpose:
    Metadata for uploaded source documents and their processing lifecycle.

    Lifecycle:
        pending ──► processing ──► done (question_count)
                         └──────► error (error message)

    A failed or pending document can be processed again, which re-runs
    the whole pipeline and overwrites its status.

Key Classes:
    - DocumentStatus: pending | processing | done | error
    - DocumentType: pdf | docx
    - DocumentMetadata: Immutable record stored in documents.json

Used By:
    - storage.document_store: Persistence
    - admin.service: Upload/process/delete workflow
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

_EXTENSION_RE = re.compile(r"\.[^.]+$")


class DocumentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


class DocumentType(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class DocumentMetadata:
    """
    Uploaded document record (immutable).

    Attributes:
        id: Random identifier assigned on upload
        name: Original file name, e.g. "March Poll.docx"
        url: Blob store URL of the file bytes
        uploaded_at: ISO-8601 upload timestamp
        status: Processing status
        type: File type used to pick the text extractor
        question_count: Questions extracted by the last successful run
        error: Message recorded by the last failed run
    """
    id: str
    name: str
    url: str
    uploaded_at: str
    status: DocumentStatus
    type: DocumentType
    question_count: Optional[int] = None
    error: Optional[str] = None

    @property
    def source_name(self) -> str:
        """File name without its final extension; the library merge key."""
        return _EXTENSION_RE.sub("", self.name)

    def mark_processing(self) -> DocumentMetadata:
        return replace(self, status=DocumentStatus.PROCESSING)

    def mark_done(self, question_count: int) -> DocumentMetadata:
        return replace(
            self,
            status=DocumentStatus.DONE,
            question_count=question_count,
            error=None,
        )

    def mark_error(self, message: str) -> DocumentMetadata:
        return replace(self, status=DocumentStatus.ERROR, error=message)

    def to_dict(self) -> dict:
        """Serialize using the documents.json key names."""
        d = {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "uploadedAt": self.uploaded_at,
            "status": self.status.value,
            "type": self.type.value,
        }
        if self.question_count is not None:
            d["questionCount"] = self.question_count
        if self.error is not None:
            d["error"] = self.error
        return d

    @classmethod
    def from_dict(cls, data: dict) -> DocumentMetadata:
        return cls(
            id=data["id"],
            name=data["name"],
            url=data["url"],
            uploaded_at=data.get("uploadedAt", ""),
            status=DocumentStatus(data.get("status", DocumentStatus.PENDING.value)),
            type=DocumentType(data["type"]),
            question_count=data.get("questionCount"),
            error=data.get("error"),
        )
