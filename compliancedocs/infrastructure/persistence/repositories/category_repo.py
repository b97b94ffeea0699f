"""Category repository: categories plus ordered subcategories. Returns application DTOs."""

from __future__ import annotations

from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.dtos.category import CategoryResult, SubcategoryData
from compliancedocs.domain.exceptions import ConflictException, ResourceNotFoundException
from compliancedocs.infrastructure.persistence.models.category import (
    Category,
    Subcategory,
)
from compliancedocs.infrastructure.persistence.repositories.base import BaseRepository


def _category_to_result(c: Category, subs: list[Subcategory]) -> CategoryResult:
    return CategoryResult(
        id=c.id,
        name=c.name,
        description=c.description,
        subcategories=[
            SubcategoryData(name=s.name, description=s.description) for s in subs
        ],
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


class CategoryRepository(BaseRepository[Category]):
    """Category catalog persistence. Subcategory order is kept in Subcategory.position."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Category)

    async def _subcategories_for(self, category_ids: list[str]) -> dict[str, list[Subcategory]]:
        if not category_ids:
            return {}
        result = await self.db.execute(
            select(Subcategory)
            .where(Subcategory.category_id.in_(category_ids))
            .order_by(Subcategory.category_id, Subcategory.position, Subcategory.name)
        )
        grouped: dict[str, list[Subcategory]] = defaultdict(list)
        for sub in result.scalars().all():
            grouped[sub.category_id].append(sub)
        return grouped

    async def _get_subcategory(self, category_id: str, name: str) -> Subcategory | None:
        result = await self.db.execute(
            select(Subcategory).where(
                Subcategory.category_id == category_id,
                Subcategory.name == name,
            )
        )
        return result.scalar_one_or_none()

    async def _to_result(self, category: Category) -> CategoryResult:
        subs = await self._subcategories_for([category.id])
        return _category_to_result(category, subs.get(category.id, []))

    async def _require(self, category_id: str) -> Category:
        category = await self._orm_get(category_id)
        if not category:
            raise ResourceNotFoundException("category", category_id)
        return category

    async def list_all(self) -> list[CategoryResult]:
        result = await self.db.execute(select(Category).order_by(Category.name))
        categories = list(result.scalars().all())
        subs = await self._subcategories_for([c.id for c in categories])
        return [_category_to_result(c, subs.get(c.id, [])) for c in categories]

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        category = await self._orm_get(category_id)
        return await self._to_result(category) if category else None

    async def get_by_name(self, name: str) -> CategoryResult | None:
        result = await self.db.execute(select(Category).where(Category.name == name))
        category = result.scalar_one_or_none()
        return await self._to_result(category) if category else None

    async def create_category(
        self,
        name: str,
        description: str,
        subcategories: list[SubcategoryData],
    ) -> CategoryResult:
        """Insert category and subcategories; ConflictException if the name is taken."""
        try:
            async with self.db.begin_nested():
                category = await self._orm_create(
                    Category(name=name, description=description)
                )
                for position, sub in enumerate(subcategories):
                    self.db.add(
                        Subcategory(
                            category_id=category.id,
                            name=sub.name,
                            description=sub.description,
                            position=position,
                        )
                    )
                await self.db.flush()
        except IntegrityError:
            raise ConflictException(
                "Category with this name already exists", {"name": name}
            ) from None
        return await self._to_result(category)

    async def update_category(
        self, category_id: str, name: str | None, description: str | None
    ) -> CategoryResult | None:
        category = await self._orm_get(category_id)
        if not category:
            return None
        if name is not None:
            category.name = name
        if description is not None:
            category.description = description
        try:
            async with self.db.begin_nested():
                category = await self._orm_save(category)
        except IntegrityError:
            raise ConflictException(
                "Category with this name already exists", {"name": name}
            ) from None
        return await self._to_result(category)

    async def delete_category(self, category_id: str) -> bool:
        category = await self._orm_get(category_id)
        if not category:
            return False
        await self._orm_delete(category)
        return True

    async def add_subcategory(
        self, category_id: str, sub: SubcategoryData
    ) -> CategoryResult:
        category = await self._require(category_id)
        next_position = await self.db.scalar(
            select(func.coalesce(func.max(Subcategory.position) + 1, 0)).where(
                Subcategory.category_id == category_id
            )
        )
        try:
            async with self.db.begin_nested():
                self.db.add(
                    Subcategory(
                        category_id=category_id,
                        name=sub.name,
                        description=sub.description,
                        position=next_position or 0,
                    )
                )
                await self.db.flush()
        except IntegrityError:
            raise ConflictException(
                "Subcategory already exists in this category", {"name": sub.name}
            ) from None
        return await self._to_result(category)

    async def update_subcategory(
        self,
        category_id: str,
        name: str,
        new_name: str | None,
        description: str | None,
    ) -> CategoryResult:
        category = await self._require(category_id)
        sub = await self._get_subcategory(category_id, name)
        if not sub:
            raise ResourceNotFoundException("subcategory", name)
        if new_name is not None:
            sub.name = new_name
        if description is not None:
            sub.description = description
        try:
            async with self.db.begin_nested():
                await self.db.flush()
        except IntegrityError:
            raise ConflictException(
                "Subcategory already exists in this category", {"name": new_name}
            ) from None
        return await self._to_result(category)

    async def remove_subcategory(self, category_id: str, name: str) -> CategoryResult:
        category = await self._require(category_id)
        sub = await self._get_subcategory(category_id, name)
        if not sub:
            raise ResourceNotFoundException("subcategory", name)
        await self.db.delete(sub)
        await self.db.flush()
        return await self._to_result(category)

    async def count(self) -> int:
        return await self._count()
