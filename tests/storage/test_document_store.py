"""
Unit Tests for DocumentStore
"""

import pytest

from poll_toolkit.core.models.documents import DocumentMetadata, DocumentStatus, DocumentType
from poll_toolkit.errors import DocumentNotFoundError, StorageError
from poll_toolkit.storage.document_store import DocumentStore


@pytest.fixture
def store(tmp_path) -> DocumentStore:
    return DocumentStore(tmp_path / "documents.json")


def _doc(doc_id: str, name: str = "poll.pdf") -> DocumentMetadata:
    return DocumentMetadata(
        id=doc_id,
        name=name,
        url=f"file:///blobs/{doc_id}.pdf",
        uploaded_at="2024-03-01T12:00:00+00:00",
        status=DocumentStatus.PENDING,
        type=DocumentType.PDF,
    )


def test_load_when_missing_then_empty(store):
    assert store.load() == []


def test_upsert_when_new_then_appended_in_order(store):
    store.upsert(_doc("a"))
    store.upsert(_doc("b"))
    assert [d.id for d in store.load()] == ["a", "b"]


def test_upsert_when_existing_then_replaced_in_place(store):
    store.upsert(_doc("a"))
    store.upsert(_doc("b"))
    store.upsert(_doc("a").mark_done(4))
    docs = store.load()
    assert [d.id for d in docs] == ["a", "b"]
    assert docs[0].status is DocumentStatus.DONE


def test_get_when_unknown_then_not_found(store):
    with pytest.raises(DocumentNotFoundError, match="Document not found"):
        store.get("missing")


def test_remove_when_present_then_returns_record(store):
    store.upsert(_doc("a"))
    removed = store.remove("a")
    assert removed.id == "a"
    assert store.load() == []


def test_remove_when_unknown_then_not_found(store):
    store.upsert(_doc("a"))
    with pytest.raises(DocumentNotFoundError):
        store.remove("b")
    assert [d.id for d in store.load()] == ["a"]


def test_save_replaces_whole_list(store):
    store.upsert(_doc("a"))
    store.save([_doc("x"), _doc("y")])
    assert [d.id for d in store.load()] == ["x", "y"]


def test_load_when_record_malformed_then_storage_error(store):
    store.path.write_text('[{"id": "a"}]', encoding="utf-8")
    with pytest.raises(StorageError, match="Invalid document list"):
        store.load()
