"""Service interfaces (ports): file store, password hasher, token service."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, BinaryIO, Protocol

if TYPE_CHECKING:
    from compliancedocs.application.dtos.document import StoredFile


class IFileStore(Protocol):
    """Protocol for blob storage (MIME/size validation, unique naming, streaming)."""

    def validate_content_type(self, content_type: str) -> None:
        """Raise UnsupportedFileTypeError if the MIME type is not allowed."""

    async def save(
        self, file_data: BinaryIO, original_filename: str, content_type: str
    ) -> StoredFile:
        """Validate and persist the stream; return the stored reference."""

    def stream(self, storage_ref: str) -> AsyncIterator[bytes]:
        """Yield file content in chunks."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete the blob; return False if it did not exist."""

    async def exists(self, storage_ref: str) -> bool:
        """Return True if the blob exists."""


class IPasswordHasher(Protocol):
    async def hash(self, password: str) -> str: ...

    async def verify(self, password: str, hashed_password: str) -> bool: ...

    async def verify_dummy(self, password: str) -> None: ...


class ITokenService(Protocol):
    def issue(self, user_id: str, role: str) -> str: ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return claims; raise ValueError for bad signature, expiry, or shape."""
