"""Category catalog operations: categories and their ordered subcategories.

Role checks happen in the API dependency (require_permission); this service
enforces naming and in-use rules.
"""

from __future__ import annotations

import logging

from compliancedocs.application.dtos.category import CategoryResult, SubcategoryData
from compliancedocs.application.interfaces.repositories import (
    ICategoryRepository,
    IDocumentRepository,
)
from compliancedocs.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def _clean_name(name: str | None, field: str = "name") -> str:
    if name is None or not name.strip():
        raise ValidationException(f"{field} is required", field=field)
    return name.strip()


class CategoryService:
    """Category catalog: list/get/create/update/delete plus subcategory edits."""

    def __init__(
        self,
        category_repo: ICategoryRepository,
        document_repo: IDocumentRepository,
    ) -> None:
        self.category_repo = category_repo
        self.document_repo = document_repo

    async def _require(self, category_id: str) -> CategoryResult:
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundException("category", category_id)
        return category

    async def list_categories(self) -> list[CategoryResult]:
        return await self.category_repo.list_all()

    async def get_category(self, category_id: str) -> CategoryResult:
        return await self._require(category_id)

    async def create_category(
        self,
        name: str | None,
        description: str | None = None,
        subcategories: list[SubcategoryData] | None = None,
    ) -> CategoryResult:
        name = _clean_name(name)
        subs: list[SubcategoryData] = []
        seen: set[str] = set()
        for sub in subcategories or []:
            sub_name = _clean_name(sub.name, "subcategories.name")
            if sub_name in seen:
                raise ValidationException(
                    f"Duplicate subcategory name: {sub_name}", field="subcategories"
                )
            seen.add(sub_name)
            subs.append(SubcategoryData(name=sub_name, description=sub.description or ""))
        if await self.category_repo.get_by_name(name):
            raise ConflictException("Category with this name already exists", {"name": name})
        created = await self.category_repo.create_category(name, description or "", subs)
        logger.info("Created category %s (%s)", created.id, created.name)
        return created

    async def update_category(
        self,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> CategoryResult:
        """Apply given fields; name collision is only checked when the name changes."""
        current = await self._require(category_id)
        if name is not None:
            name = _clean_name(name)
            if name != current.name:
                existing = await self.category_repo.get_by_name(name)
                if existing is not None and existing.id != category_id:
                    raise ConflictException(
                        "Category with this name already exists", {"name": name}
                    )
        updated = await self.category_repo.update_category(category_id, name, description)
        if updated is None:
            raise ResourceNotFoundException("category", category_id)
        return updated

    async def delete_category(self, category_id: str) -> None:
        """Delete a category; blocked while any document (any status) references it."""
        await self._require(category_id)
        in_use = await self.document_repo.count_by_category(category_id)
        if in_use:
            raise ConflictException(
                "Cannot delete category with associated documents",
                {"category_id": category_id, "documents": in_use},
            )
        await self.category_repo.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    async def add_subcategory(
        self,
        category_id: str,
        name: str | None,
        description: str | None = None,
    ) -> CategoryResult:
        name = _clean_name(name)
        category = await self._require(category_id)
        if category.has_subcategory(name):
            raise ConflictException(
                "Subcategory already exists in this category", {"name": name}
            )
        return await self.category_repo.add_subcategory(
            category_id, SubcategoryData(name=name, description=description or "")
        )

    async def update_subcategory(
        self,
        category_id: str,
        name: str,
        new_name: str | None = None,
        description: str | None = None,
    ) -> CategoryResult:
        """Rename and/or redescribe; a rename is cascaded to every document in the category."""
        category = await self._require(category_id)
        if not category.has_subcategory(name):
            raise ResourceNotFoundException("subcategory", name)
        if new_name is not None:
            new_name = _clean_name(new_name, "new_name")
            if new_name == name:
                new_name = None
            elif category.has_subcategory(new_name):
                raise ConflictException(
                    "Subcategory already exists in this category", {"name": new_name}
                )
        updated = await self.category_repo.update_subcategory(
            category_id, name, new_name, description
        )
        if new_name is not None:
            moved = await self.document_repo.rename_subcategory(category_id, name, new_name)
            logger.info(
                "Renamed subcategory %r to %r in %s (%d documents updated)",
                name,
                new_name,
                category_id,
                moved,
            )
        return updated

    async def remove_subcategory(self, category_id: str, name: str) -> CategoryResult:
        """Remove a subcategory; blocked while any document references it."""
        category = await self._require(category_id)
        if not category.has_subcategory(name):
            raise ResourceNotFoundException("subcategory", name)
        in_use = await self.document_repo.count_by_subcategory(category_id, name)
        if in_use:
            raise ConflictException(
                "Cannot delete subcategory with associated documents",
                {"subcategory": name, "documents": in_use},
            )
        return await self.category_repo.remove_subcategory(category_id, name)
