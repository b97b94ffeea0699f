"""File storage backends."""

from compliancedocs.infrastructure.external.storage.local_storage import LocalFileStore

__all__ = ["LocalFileStore"]
