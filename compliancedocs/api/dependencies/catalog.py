"""Category catalog dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.use_cases.categories import CategoryService
from compliancedocs.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from compliancedocs.infrastructure.persistence.repositories import (
    CategoryRepository,
    DocumentRepository,
)


async def get_category_reader(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CategoryService:
    """CategoryService for list/get (no transaction)."""
    return CategoryService(CategoryRepository(db), DocumentRepository(db))


async def get_category_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CategoryService:
    """CategoryService for mutations; a subcategory rename and its document cascade share one transaction."""
    return CategoryService(CategoryRepository(db), DocumentRepository(db))
