"""
Request-scoped temporary storage for uploaded and merged files.

Every file written during a request is registered with a StorageScope and
removed when the scope exits, whether the request succeeded or failed.
"""

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from ..models import UploadedFile

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when temporary files cannot be written."""

    pass


class StorageScope:
    """Tracks the temporary files owned by a single request."""

    def __init__(self, root: Path):
        self.root = root
        self._tracked: list[Path] = []
        self._retained: set[Path] = set()

    def allocate(self) -> Path:
        """Reserve a fresh random path under the storage root."""
        path = self.root / uuid.uuid4().hex
        self._tracked.append(path)
        return path

    def track(self, path: Path, keep: bool = False) -> Path:
        """
        Register a file created outside the scope.

        Args:
            path: File to clean up when the scope exits.
            keep: If True the file survives the scope.
        """
        self._tracked.append(path)
        if keep:
            self._retained.add(path)
        return path

    def cleanup(self) -> None:
        removed = 0
        for path in self._tracked:
            if path in self._retained:
                continue
            try:
                path.unlink(missing_ok=True)
                removed += 1
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", path, e)
        logger.debug("Removed %d temporary file(s) from %s", removed, self.root)
        self._tracked.clear()


class TempStorage:
    """
    Owner of the uploads directory.

    Uploads and merged output share one directory; filenames are random so
    concurrent requests never collide.
    """

    def __init__(self, root: Path | str = "uploads", keep_merged: bool = False):
        """
        Args:
            root: Uploads directory, created on first use.
            keep_merged: Leave merged PDFs on disk after the request.
        """
        self.root = Path(root)
        self.keep_merged = keep_merged

    @contextmanager
    def scope(self) -> Iterator[StorageScope]:
        """
        Open a storage scope for one request.

        Raises:
            StorageError: If the uploads directory cannot be created.
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create uploads directory: {e}") from e

        scope = StorageScope(self.root)
        try:
            yield scope
        finally:
            scope.cleanup()


async def receive_uploads(
    files: Sequence[UploadFile], scope: StorageScope
) -> list[UploadedFile]:
    """
    Persist multipart uploads to temporary storage.

    No type or size validation is done here; any content is handed to the
    merger as-is.

    Args:
        files: Uploaded parts in submission order.
        scope: Storage scope that owns the written files.

    Returns:
        Stored file descriptors in submission order.

    Raises:
        StorageError: If a file cannot be written.
    """
    stored: list[UploadedFile] = []
    for upload in files:
        path = scope.allocate()
        try:
            content = await upload.read()
            await run_in_threadpool(path.write_bytes, content)
        except OSError as e:
            logger.error("Failed to store upload %r: %s", upload.filename, e)
            raise StorageError(f"Could not store upload {upload.filename!r}") from e
        finally:
            await upload.close()

        stored.append(UploadedFile(path=path, original_name=upload.filename or ""))

    logger.info("Stored %d upload(s) in %s", len(stored), scope.root)
    return stored
