"""Infrastructure exceptions for file storage.

Storage errors extend ComplianceDocsException so presentation can map them
to HTTP responses consistently.
"""

from compliancedocs.domain.exceptions import ComplianceDocsException


class StorageException(ComplianceDocsException):
    """Base exception for storage operations."""


class UnsupportedFileTypeError(StorageException):
    """Upload MIME type is not on the allow-list."""

    def __init__(self, content_type: str) -> None:
        super().__init__(
            "Invalid file type. Only documents, spreadsheets, presentations, "
            "text and images are allowed.",
            "UNSUPPORTED_FILE_TYPE",
            {"content_type": content_type},
        )


class FileTooLargeError(StorageException):
    """Upload exceeded the configured maximum size."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            f"File must be at most {max_bytes} bytes",
            "PAYLOAD_TOO_LARGE",
            {"max_bytes": max_bytes},
        )


class StorageNotFoundError(StorageException):
    """File not found in storage."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"File not found: {storage_ref}",
            "STORAGE_NOT_FOUND",
            {"storage_ref": storage_ref},
        )


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to store file: {storage_ref}",
            "STORAGE_UPLOAD_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageDownloadError(StorageException):
    """File read failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to read file: {storage_ref}",
            "STORAGE_DOWNLOAD_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {storage_ref}",
            "STORAGE_DELETE_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference escapes the storage root."""

    def __init__(self, storage_ref: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {storage_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"storage_ref": storage_ref, "operation": operation},
        )
