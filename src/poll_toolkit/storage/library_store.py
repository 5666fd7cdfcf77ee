"""
Module: storage.library_store

Purpose:
    Persist the question library as a single versioned JSON snapshot
    (questions-db.json). Every write replaces the whole snapshot, stamps
    `lastUpdated` and increments `version`.

    Writes hold an exclusive file lock across read and write, and save()
    accepts an expected version for compare-and-swap. Together these
    prevent the lost-update race of an unlocked read-modify-write.

Key Classes:
    - LibraryStore: load/save/update over one snapshot file

Dependencies:
    - storage.file_locking: portalocker-based JSON locking
    - core.schemas.validator: Snapshot validation
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from poll_toolkit.core.models.documents import utc_timestamp
from poll_toolkit.core.models.library import LibraryStats, QuestionLibrary
from poll_toolkit.core.models.questions import Question
from poll_toolkit.core.schemas.validator import ValidationError, validate_library
from poll_toolkit.errors import ConcurrentModificationError, StorageError
from .file_locking import locked_read_json, locked_read_modify_write_json

logger = logging.getLogger(__name__)


class LibraryStore:
    """
    JSON snapshot store for the question library.

    Args:
        path: Snapshot file path
        seed_path: Optional questions JSON used while no snapshot exists

    Example:
        >>> store = LibraryStore(Path("workspace/questions-db.json"))
        >>> library = store.load()
        >>> stats = store.save(library.questions, expected_version=library.version)
    """

    def __init__(self, path: Path, seed_path: Optional[Path] = None) -> None:
        self.path = path
        self.seed_path = seed_path

    def load(self) -> QuestionLibrary:
        """Read the current snapshot (or the seed library if none exists)."""
        data = locked_read_json(self.path, default=self._seed_data)
        return self._to_library(data)

    def save(
        self,
        questions: Iterable[Question],
        *,
        expected_version: Optional[int] = None,
    ) -> LibraryStats:
        """
        Replace the whole library with `questions`.

        Args:
            questions: New library contents, in order
            expected_version: If given, fail unless the stored snapshot
                still has this version

        Returns:
            Statistics of the written library

        Raises:
            ConcurrentModificationError: If expected_version is stale
            ValidationError: If question ids are not unique
        """
        new_questions = tuple(questions)

        def _replace(current: QuestionLibrary) -> QuestionLibrary:
            if expected_version is not None and current.version != expected_version:
                raise ConcurrentModificationError(expected_version, current.version)
            return QuestionLibrary(new_questions, version=current.version)

        return self.update(_replace).stats

    def update(self, modifier: Callable[[QuestionLibrary], QuestionLibrary]) -> QuestionLibrary:
        """
        Apply `modifier` to the current library and save the result.

        The modifier runs while the exclusive lock is held.

        Returns:
            The saved library (with its new version and timestamp)
        """
        saved: dict = {}

        def _modify(data: Any) -> dict:
            current = self._to_library(data)
            modified = modifier(current)
            stamped = QuestionLibrary(
                modified.questions,
                version=current.version + 1,
                last_updated=utc_timestamp(),
            )
            saved["library"] = stamped
            return stamped.to_dict()

        locked_read_modify_write_json(self.path, _modify, default=self._seed_data)

        library = saved["library"]
        logger.debug(f"Saved library v{library.version} with {len(library)} questions")
        return library

    def _seed_data(self) -> dict:
        if self.seed_path is None:
            return {"questions": [], "version": 0}
        try:
            data = json.loads(self.seed_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read seed questions {self.seed_path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Seed questions {self.seed_path} must be a JSON object")
        logger.info(f"Seeding library from {self.seed_path}")
        # Seed files carry no version; they always precede the first save
        data["version"] = 0
        return data

    def _to_library(self, data: Any) -> QuestionLibrary:
        try:
            validate_library(data)
            return QuestionLibrary.from_dict(data)
        except ValidationError as e:
            raise StorageError(f"Invalid library snapshot {self.path.name}: {e}") from e
