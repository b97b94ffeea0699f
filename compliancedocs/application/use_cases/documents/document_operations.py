"""Document operations: commands (create, update, soft delete, revision upload) and queries.

Writes that involve a file store the blob first; any failure after that
point deletes the blob again before the error propagates, so a failed
request never leaves an orphaned file behind.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import AsyncIterator
from datetime import datetime
from typing import BinaryIO

from compliancedocs.application.dtos.document import (
    DocumentChanges,
    DocumentCreate,
    DocumentDetail,
    DocumentFilters,
    DocumentPage,
    DocumentResult,
    FileDownload,
    RevisionCreate,
    RevisionResult,
    SortSpec,
    StoredFile,
)
from compliancedocs.application.interfaces.repositories import (
    ICategoryRepository,
    IDocumentRepository,
    IRevisionRepository,
)
from compliancedocs.application.interfaces.services import IFileStore
from compliancedocs.domain.enums import DocumentStatus
from compliancedocs.domain.exceptions import (
    DocumentVersionConflictException,
    FileNotFoundException,
    InvalidCategoryException,
    InvalidSubcategoryException,
    ResourceNotFoundException,
    ValidationException,
)
from compliancedocs.shared.utils.datetime import days_from_now, ensure_utc

logger = logging.getLogger(__name__)

# Public sort keys (snake_case and camelCase) -> canonical column name.
SORT_ALIASES: dict[str, str] = {
    "title": "title",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
    "review_date": "review_date",
    "reviewDate": "review_date",
    "version": "version",
    "file_size": "file_size",
    "fileSize": "file_size",
    "status": "status",
    "subcategory": "subcategory",
}
DEFAULT_SORT = SortSpec(column="updated_at", descending=True)


def parse_sort(raw: str | None) -> SortSpec:
    """Parse "field:asc|desc" (direction optional, default asc). Unknown field raises ValidationException."""
    if raw is None or not raw.strip():
        return DEFAULT_SORT
    field, _, direction = raw.strip().partition(":")
    column = SORT_ALIASES.get(field.strip())
    if column is None:
        raise ValidationException(
            f"Cannot sort by '{field.strip()}'. Allowed: {', '.join(sorted(set(SORT_ALIASES.values())))}",
            field="sort",
        )
    direction = direction.strip().lower() or "asc"
    if direction not in ("asc", "desc"):
        raise ValidationException("Sort direction must be 'asc' or 'desc'", field="sort")
    return SortSpec(column=column, descending=direction == "desc")


def parse_tags(raw: str | list[str] | None) -> list[str]:
    """Accept a list, a JSON array string, or a comma-separated string; drop blanks."""
    if raw is None:
        return []
    items: list[str]
    if isinstance(raw, list):
        if len(raw) == 1 and raw[0].strip().startswith("["):
            return parse_tags(raw[0])
        items = raw
    else:
        text = raw.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValidationException("tags must be a JSON array of strings", field="tags") from e
            if not isinstance(decoded, list):
                raise ValidationException("tags must be a JSON array of strings", field="tags")
            items = [str(t) for t in decoded]
        else:
            items = text.split(",")
    return [t.strip() for t in items if t and t.strip()]


def _validate_status(status: str | None) -> str | None:
    if status is not None and status not in DocumentStatus.values():
        raise ValidationException(
            f"status must be one of: {', '.join(DocumentStatus.values())}", field="status"
        )
    return status


class DocumentCommandService:
    """Document writes: create with upload, partial update, soft delete, revision upload."""

    def __init__(
        self,
        file_store: IFileStore,
        document_repo: IDocumentRepository,
        revision_repo: IRevisionRepository,
        category_repo: ICategoryRepository,
        *,
        review_period_days: int = 365,
    ) -> None:
        self.file_store = file_store
        self.document_repo = document_repo
        self.revision_repo = revision_repo
        self.category_repo = category_repo
        self.review_period_days = review_period_days

    async def _discard_blob(self, stored: StoredFile) -> None:
        """Compensating delete after a failed write; never masks the original error."""
        try:
            await self.file_store.delete(stored.storage_ref)
            logger.info("Removed orphaned upload %s", stored.storage_ref)
        except Exception:
            logger.exception("Failed to remove orphaned upload %s", stored.storage_ref)

    async def _check_classification(self, category_id: str, subcategory: str) -> None:
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise InvalidCategoryException(category_id)
        if not category.has_subcategory(subcategory):
            raise InvalidSubcategoryException(subcategory, category_id)

    async def create_document(
        self,
        actor_id: str,
        *,
        file_data: BinaryIO | None,
        filename: str | None,
        content_type: str | None,
        title: str | None,
        category_id: str | None,
        subcategory: str | None,
        description: str | None = None,
        tags: list[str] | None = None,
        review_date: datetime | None = None,
    ) -> DocumentResult:
        """Store the upload, then validate and insert metadata (version 1)."""
        if file_data is None or not filename:
            raise ValidationException("No file uploaded", field="file")
        stored = await self.file_store.save(
            file_data, filename, content_type or "application/octet-stream"
        )
        try:
            if not title or not title.strip():
                raise ValidationException("title is required", field="title")
            if not category_id:
                raise ValidationException("category is required", field="category")
            if not subcategory or not subcategory.strip():
                raise ValidationException("subcategory is required", field="subcategory")
            subcategory = subcategory.strip()
            await self._check_classification(category_id, subcategory)
            created = await self.document_repo.create_document(
                DocumentCreate(
                    title=title.strip(),
                    description=(description or "").strip(),
                    category_id=category_id,
                    subcategory=subcategory,
                    tags=list(tags or []),
                    file=stored,
                    uploaded_by=actor_id,
                    review_date=ensure_utc(review_date)
                    or days_from_now(self.review_period_days),
                )
            )
        except Exception:
            await self._discard_blob(stored)
            raise
        logger.info("Created document %s (%s)", created.id, stored.storage_ref)
        return created

    async def update_document(
        self, actor_id: str, document_id: str, changes: DocumentChanges
    ) -> DocumentResult:
        """Partial update; category/subcategory are validated together against the resulting pair."""
        current = await self.document_repo.get_by_id(document_id)
        if current is None:
            raise ResourceNotFoundException("document", document_id)
        if changes.title is not None and not changes.title.strip():
            raise ValidationException("title must not be empty", field="title")
        _validate_status(changes.status)
        if changes.subcategory is not None:
            changes = dataclasses.replace(changes, subcategory=changes.subcategory.strip())
        if changes.category_id is not None or changes.subcategory is not None:
            await self._check_classification(
                changes.category_id or current.category_id,
                changes.subcategory if changes.subcategory is not None else current.subcategory,
            )
        updated = await self.document_repo.update_document(document_id, changes, actor_id)
        if updated is None:
            raise ResourceNotFoundException("document", document_id)
        return updated

    async def soft_delete(self, actor_id: str, document_id: str) -> DocumentResult:
        deleted = await self.document_repo.soft_delete(document_id, actor_id)
        if deleted is None:
            raise ResourceNotFoundException("document", document_id)
        logger.info("Soft-deleted document %s", document_id)
        return deleted

    async def upload_revision(
        self,
        actor_id: str,
        document_id: str,
        *,
        file_data: BinaryIO | None,
        filename: str | None,
        content_type: str | None,
        changes: str | None = None,
    ) -> DocumentResult:
        """Snapshot the current file as a revision, then point the document at the new blob.

        The version moves from N to N+1 only if no concurrent upload moved it
        first; otherwise DocumentVersionConflictException.
        """
        current = await self.document_repo.get_by_id(document_id)
        if current is None:
            raise ResourceNotFoundException("document", document_id)
        if file_data is None or not filename:
            raise ValidationException("No file uploaded", field="file")
        stored = await self.file_store.save(
            file_data, filename, content_type or "application/octet-stream"
        )
        try:
            await self.revision_repo.create_revision(
                RevisionCreate(
                    document_id=current.id,
                    version=current.version,
                    file_path=current.file_path,
                    file_name=current.file_name,
                    file_size=current.file_size,
                    file_type=current.file_type,
                    changes=(changes or "").strip(),
                    created_by=actor_id,
                )
            )
            updated = await self.document_repo.replace_file_if_version(
                current.id, current.version, stored, actor_id
            )
            if updated is None:
                raise DocumentVersionConflictException(current.id, current.version)
        except Exception:
            await self._discard_blob(stored)
            raise
        logger.info(
            "Document %s moved to version %d (%s)",
            document_id,
            updated.version,
            stored.storage_ref,
        )
        return updated


class DocumentQueryService:
    """Document reads: listing, detail, revision history, and downloads."""

    def __init__(
        self,
        file_store: IFileStore,
        document_repo: IDocumentRepository,
        revision_repo: IRevisionRepository,
        *,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self.file_store = file_store
        self.document_repo = document_repo
        self.revision_repo = revision_repo
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def list_documents(
        self,
        *,
        category_id: str | None = None,
        subcategory: str | None = None,
        status: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> DocumentPage:
        page = page or 1
        limit = limit or self.default_page_size
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if limit < 1 or limit > self.max_page_size:
            raise ValidationException(
                f"limit must be between 1 and {self.max_page_size}", field="limit"
            )
        filters = DocumentFilters(
            category_id=category_id or None,
            subcategory=subcategory or None,
            status=_validate_status(status or DocumentStatus.ACTIVE.value),
            search=search or None,
        )
        return await self.document_repo.list_documents(
            filters, parse_sort(sort), page, limit
        )

    async def get_document(self, document_id: str) -> DocumentDetail:
        detail = await self.document_repo.get_detail(document_id)
        if detail is None:
            raise ResourceNotFoundException("document", document_id)
        return detail

    async def get_download(self, document_id: str) -> FileDownload:
        """Current file of the document; FileNotFoundException if the blob is gone."""
        doc = await self.document_repo.get_by_id(document_id)
        if doc is None:
            raise ResourceNotFoundException("document", document_id)
        if not await self.file_store.exists(doc.file_path):
            logger.warning("Blob %s missing for document %s", doc.file_path, document_id)
            raise FileNotFoundException(document_id)
        return FileDownload(
            storage_ref=doc.file_path,
            file_name=doc.file_name,
            file_type=doc.file_type,
            file_size=doc.file_size,
        )

    async def list_revisions(self, document_id: str) -> list[RevisionResult]:
        if await self.document_repo.get_by_id(document_id) is None:
            raise ResourceNotFoundException("document", document_id)
        return await self.revision_repo.list_for_document(document_id)

    async def get_revision_download(self, document_id: str, version: int) -> FileDownload:
        """File of an exact (document, version) revision."""
        revision = await self.revision_repo.get_by_version(document_id, version)
        if revision is None:
            raise ResourceNotFoundException("revision", f"{document_id}@{version}")
        if not await self.file_store.exists(revision.file_path):
            logger.warning(
                "Blob %s missing for revision %s@%d",
                revision.file_path,
                document_id,
                version,
            )
            raise FileNotFoundException(document_id, version)
        return FileDownload(
            storage_ref=revision.file_path,
            file_name=revision.file_name,
            file_type=revision.file_type,
            file_size=revision.file_size,
        )

    def open_stream(self, download: FileDownload) -> AsyncIterator[bytes]:
        return self.file_store.stream(download.storage_ref)
