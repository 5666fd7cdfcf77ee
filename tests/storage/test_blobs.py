"""
Unit Tests for LocalBlobStore
"""

import pytest

from poll_toolkit.errors import DocumentFetchError, StorageError
from poll_toolkit.storage.blobs import LocalBlobStore


@pytest.fixture
def blobs(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "blobs")


def test_put_when_random_suffix_then_names_differ(blobs):
    first = blobs.put("documents/poll.pdf", b"one")
    second = blobs.put("documents/poll.pdf", b"two")
    assert first != second
    assert first.startswith("file://")
    assert first.endswith(".pdf")
    assert blobs.get(first) == b"one"
    assert blobs.get(second) == b"two"


def test_put_when_suffix_disabled_then_exact_name(blobs, tmp_path):
    url = blobs.put("documents/poll.docx", b"data", add_random_suffix=False)
    assert url == (tmp_path / "blobs" / "documents" / "poll.docx").resolve().as_uri()


@pytest.mark.parametrize("name", ["../escape.pdf", "/etc/passwd"])
def test_put_when_name_escapes_root_then_error(blobs, name):
    with pytest.raises(StorageError, match="Invalid blob name"):
        blobs.put(name, b"x")


def test_get_when_blob_missing_then_fetch_error(blobs):
    url = blobs.put("documents/poll.pdf", b"x")
    blobs.delete(url)
    with pytest.raises(DocumentFetchError, match="Failed to fetch document"):
        blobs.get(url)


def test_get_when_url_outside_root_then_fetch_error(blobs, tmp_path):
    outside = tmp_path / "other.pdf"
    outside.write_bytes(b"x")
    with pytest.raises(DocumentFetchError, match="outside store"):
        blobs.get(outside.as_uri())


def test_get_when_not_file_url_then_fetch_error(blobs):
    with pytest.raises(DocumentFetchError, match="Unsupported blob URL"):
        blobs.get("https://example.com/poll.pdf")


def test_delete_when_missing_then_false(blobs):
    url = blobs.put("documents/poll.pdf", b"x")
    assert blobs.delete(url) is True
    assert blobs.delete(url) is False
