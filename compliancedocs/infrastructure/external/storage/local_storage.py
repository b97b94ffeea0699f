"""Local filesystem file store with MIME/size validation and atomic writes."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import AsyncIterator, Iterable
from pathlib import Path
from typing import BinaryIO

import aiofiles
import aiofiles.os

from compliancedocs.application.dtos.document import StoredFile
from compliancedocs.infrastructure.exceptions import (
    FileTooLargeError,
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
    UnsupportedFileTypeError,
)
from compliancedocs.shared.utils.generators import generate_storage_name

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Blob store rooted at storage_root.

    Content type is checked before any byte is written. Writes stream into a
    temp file in the same directory, enforce max_upload_size while copying,
    then rename into place so readers never see partial files. Storage
    references are file names relative to storage_root; resolved paths are
    validated against the root.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(
        self,
        storage_root: str,
        max_upload_size: int,
        allowed_mime_types: Iterable[str],
    ) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.max_upload_size = max_upload_size
        self.allowed_mime_types = frozenset(m.lower() for m in allowed_mime_types)
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    def validate_content_type(self, content_type: str) -> None:
        base_type = (content_type or "").split(";", 1)[0].strip().lower()
        if base_type not in self.allowed_mime_types:
            raise UnsupportedFileTypeError(content_type or "")

    async def save(
        self, file_data: BinaryIO, original_filename: str, content_type: str
    ) -> StoredFile:
        """Validate type, copy the stream to disk atomically, and return the stored reference."""
        self.validate_content_type(content_type)
        storage_ref = generate_storage_name(original_filename)
        target_path = self._get_full_path(storage_ref)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.storage_root, prefix=".tmp_", suffix=target_path.suffix
        )
        os.close(temp_fd)
        try:
            size = 0
            async with aiofiles.open(temp_path, "wb") as f:
                while chunk := file_data.read(self.CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_upload_size:
                        raise FileTooLargeError(self.max_upload_size)
                    await f.write(chunk)
            os.chmod(temp_path, 0o640)
            os.rename(temp_path, target_path)
        except FileTooLargeError:
            raise
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)

        logger.debug("Stored %s (%d bytes, %s)", storage_ref, size, content_type)
        return StoredFile(
            storage_ref=storage_ref,
            original_name=os.path.basename(original_filename or "") or storage_ref,
            size=size,
            content_type=content_type,
        )

    async def stream(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Stream file content."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while chunk := await f.read(self.CHUNK_SIZE):
                    yield chunk
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if it was already gone."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        return True

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists (False for refs outside the root)."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False
