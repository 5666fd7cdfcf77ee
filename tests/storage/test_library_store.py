"""
Unit Tests for LibraryStore

Tests for snapshot persistence, version stamping and compare-and-swap.
"""

import json

import pytest

from poll_toolkit.core.models.questions import Category
from poll_toolkit.core.schemas.validator import ValidationError
from poll_toolkit.errors import ConcurrentModificationError, StorageError
from poll_toolkit.storage.library_store import LibraryStore


@pytest.fixture
def store(tmp_path) -> LibraryStore:
    return LibraryStore(tmp_path / "questions-db.json")


class TestLoad:
    def test_load_when_no_snapshot_then_empty_version_zero(self, store):
        library = store.load()
        assert len(library) == 0
        assert library.version == 0

    def test_load_when_seed_configured_then_seed_questions(self, tmp_path, make_question):
        seed = tmp_path / "questions.json"
        seed.write_text(json.dumps({"questions": [make_question().to_dict()]}), encoding="utf-8")
        store = LibraryStore(tmp_path / "questions-db.json", seed_path=seed)

        library = store.load()
        assert [q.id for q in library.questions] == ["poll_Q1"]
        assert library.version == 0

    def test_update_when_seeded_then_seed_preserved_in_first_snapshot(self, tmp_path, make_question):
        seed = tmp_path / "questions.json"
        seed.write_text(json.dumps({"questions": [make_question().to_dict()]}), encoding="utf-8")
        store = LibraryStore(tmp_path / "questions-db.json", seed_path=seed)

        saved = store.update(lambda lib: lib.replace_source("other", []))
        assert [q.id for q in saved.questions] == ["poll_Q1"]
        assert saved.version == 1

    def test_load_when_snapshot_invalid_then_storage_error(self, store):
        store.path.write_text(json.dumps({"questions": [{"id": "x"}]}), encoding="utf-8")
        with pytest.raises(StorageError, match="Invalid library snapshot"):
            store.load()

    def test_load_when_seed_unreadable_then_storage_error(self, tmp_path):
        store = LibraryStore(tmp_path / "questions-db.json", seed_path=tmp_path / "absent.json")
        with pytest.raises(StorageError, match="Could not read seed questions"):
            store.load()


class TestSave:
    def test_save_when_called_then_stats_returned_and_version_bumped(self, store, make_question):
        stats = store.save([make_question()])
        assert stats.total_questions == 1
        assert stats.by_category == {Category.JOB_APPROVAL.value: 1}

        library = store.load()
        assert library.version == 1
        assert library.last_updated

    def test_save_when_snapshot_written_then_stats_persisted(self, store, make_question):
        store.save([make_question()])
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["stats"] == {"total_questions": 1, "by_category": {"job_approval": 1}}
        assert data["lastUpdated"]

    def test_save_when_expected_version_current_then_succeeds(self, store, make_question):
        store.save([make_question()])
        store.save([], expected_version=1)
        assert store.load().version == 2

    def test_save_when_expected_version_stale_then_conflict_and_nothing_written(self, store, make_question):
        store.save([make_question()])
        store.save([make_question("poll_Q2", marker="Q2")])

        with pytest.raises(ConcurrentModificationError) as exc_info:
            store.save([], expected_version=1)
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2
        assert [q.id for q in store.load().questions] == ["poll_Q2"]

    def test_save_when_duplicate_ids_then_validation_error(self, store, make_question):
        with pytest.raises(ValidationError):
            store.save([make_question(), make_question()])
        assert store.load().version == 0


def test_load_when_seed_is_not_object_then_storage_error(tmp_path):
    seed = tmp_path / "questions.json"
    seed.write_text("[]", encoding="utf-8")
    store = LibraryStore(tmp_path / "questions-db.json", seed_path=seed)
    with pytest.raises(StorageError, match="must be a JSON object"):
        store.load()
