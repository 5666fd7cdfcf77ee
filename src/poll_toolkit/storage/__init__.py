"""
Module: storage

Purpose:
    Persistence for uploaded files and the JSON snapshots (question
    library, document metadata). Snapshots are always replaced as a whole
    under an exclusive portalocker lock.

Key Classes:
    - LocalBlobStore: Directory-backed blob store
    - LibraryStore: questions-db.json
    - DocumentStore: documents.json

Dependencies:
    - portalocker: Cross-platform file locking
"""

from .blobs import BlobStore, LocalBlobStore
from .document_store import DocumentStore
from .library_store import LibraryStore

__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "DocumentStore",
    "LibraryStore",
]
