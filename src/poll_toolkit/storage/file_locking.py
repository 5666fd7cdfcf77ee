"""
Module: storage.file_locking

Purpose:
    Cross-platform file locking for the JSON snapshots. Every snapshot
    read takes a shared lock and every read-modify-write holds an exclusive
    lock from read to write, so concurrent processes never interleave.

Key Functions:
    - locked_read_json: Read JSON under a shared lock
    - locked_read_modify_write_json: Read-modify-write JSON under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - storage.library_store: questions-db.json
    - storage.document_store: documents.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import portalocker

from poll_toolkit.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decode(path: Path, content: str, default: Callable[[], T]) -> Any:
    if not content.strip():
        return default()
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise StorageError(f"Corrupt snapshot {path.name}: {e}") from e


def locked_read_json(path: Path, default: Callable[[], T]) -> Any:
    """
    Read a JSON file with a shared lock.

    Args:
        path: Path to JSON file.
        default: Factory for the value returned when the file is missing or empty.

    Returns:
        Decoded JSON data.

    Raises:
        StorageError: If the file exists but is not valid JSON.
    """
    if not path.exists():
        return default()

    with open(path, 'r', encoding='utf-8') as f:
        portalocker.lock(f, portalocker.LOCK_SH)
        try:
            content = f.read()
        finally:
            portalocker.unlock(f)

    return _decode(path, content, default)


def locked_read_modify_write_json(
    path: Path,
    modifier: Callable[[Any], Any],
    default: Callable[[], Any] = dict,
) -> Any:
    """
    Read JSON, apply modifier, write back - all with exclusive lock.

    If the modifier raises, nothing is written and the exception
    propagates to the caller.

    Args:
        path: Path to JSON file.
        modifier: Function that takes existing data, returns modified data.
        default: Factory for default data if file doesn't exist.

    Returns:
        The modified data that was written.

    Example:
        >>> def add_doc(existing):
        ...     return existing + [new_doc]
        >>> locked_read_modify_write_json(documents_path, add_doc, default=list)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create empty so r+ can open it; empty content decodes to default()
    if not path.exists():
        path.touch()

    with open(path, 'r+', encoding='utf-8') as f:
        portalocker.lock(f, portalocker.LOCK_EX)
        try:
            f.seek(0)
            existing = _decode(path, f.read(), default)

            modified = modifier(existing)

            f.seek(0)
            f.truncate()
            json.dump(modified, f, indent=2, ensure_ascii=False)
            f.flush()

            logger.debug(f"Wrote snapshot {path.name}")
            return modified
        finally:
            portalocker.unlock(f)
