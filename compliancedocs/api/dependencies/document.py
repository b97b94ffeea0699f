"""Document dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.use_cases.documents import (
    DocumentCommandService,
    DocumentQueryService,
)
from compliancedocs.core.config import get_settings
from compliancedocs.infrastructure.external.storage import LocalFileStore
from compliancedocs.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from compliancedocs.infrastructure.persistence.repositories import (
    CategoryRepository,
    DocumentRepository,
    RevisionRepository,
)


def get_file_store() -> LocalFileStore:
    settings = get_settings()
    return LocalFileStore(
        storage_root=settings.storage_root,
        max_upload_size=settings.max_upload_size,
        allowed_mime_types=settings.allowed_mime_type_set,
    )


async def get_document_command_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    file_store: Annotated[LocalFileStore, Depends(get_file_store)],
) -> DocumentCommandService:
    """Build DocumentCommandService; revision snapshot and version bump share the request transaction."""
    return DocumentCommandService(
        file_store,
        DocumentRepository(db),
        RevisionRepository(db),
        CategoryRepository(db),
        review_period_days=get_settings().review_period_days,
    )


async def get_document_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    file_store: Annotated[LocalFileStore, Depends(get_file_store)],
) -> DocumentQueryService:
    settings = get_settings()
    return DocumentQueryService(
        file_store,
        DocumentRepository(db),
        RevisionRepository(db),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
