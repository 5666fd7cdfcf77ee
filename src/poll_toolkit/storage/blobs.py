"""
Module: storage.blobs

Purpose:
    Blob storage for uploaded document files. The admin workflow only
    needs put/get/delete by URL; LocalBlobStore implements that over a
    directory and hands out file:// URLs.

Key Classes:
    - BlobStore: Protocol for blob backends
    - LocalBlobStore: Directory-backed implementation
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path, PurePosixPath
from typing import Protocol
from urllib.parse import unquote, urlparse

from poll_toolkit.errors import DocumentFetchError, StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def put(self, name: str, data: bytes, *, add_random_suffix: bool = True) -> str: ...

    def get(self, url: str) -> bytes: ...

    def delete(self, url: str) -> bool: ...


class LocalBlobStore:
    """
    Store blobs as files under a root directory.

    Example:
        >>> store = LocalBlobStore(Path("workspace/blobs"))
        >>> url = store.put("documents/poll.pdf", b"%PDF-...")
        >>> store.get(url)[:4]
        b'%PDF'
    """

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def put(self, name: str, data: bytes, *, add_random_suffix: bool = True) -> str:
        """
        Write bytes under `name` and return the blob URL.

        With add_random_suffix, "documents/poll.pdf" is stored as
        "documents/poll-<hex>.pdf" so repeated uploads never overwrite.
        """
        relative = PurePosixPath(name)
        if relative.is_absolute() or ".." in relative.parts:
            raise StorageError(f"Invalid blob name: {name!r}")
        if add_random_suffix:
            relative = relative.with_name(
                f"{relative.stem}-{secrets.token_hex(6)}{relative.suffix}"
            )

        path = self.root.joinpath(*relative.parts)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Stored blob {relative} ({len(data)} bytes)")
        return path.as_uri()

    def get(self, url: str) -> bytes:
        path = self._path_for(url)
        try:
            return path.read_bytes()
        except OSError as e:
            raise DocumentFetchError("Failed to fetch document") from e

    def delete(self, url: str) -> bool:
        """Delete a blob. Returns False if it did not exist."""
        path = self._path_for(url)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _path_for(self, url: str) -> Path:
        parsed = urlparse(url)
        if parsed.scheme != "file":
            raise DocumentFetchError(f"Unsupported blob URL: {url!r}")
        path = Path(unquote(parsed.path)).resolve()
        if self.root not in path.parents:
            raise DocumentFetchError(f"Blob URL outside store: {url!r}")
        return path
