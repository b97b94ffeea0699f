"""Document repository. Returns application DTOs; list/detail reads join names."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from compliancedocs.application.dtos.category import SubcategoryData
from compliancedocs.application.dtos.document import (
    CategoryRef,
    DocumentChanges,
    DocumentCreate,
    DocumentDetail,
    DocumentFilters,
    DocumentPage,
    DocumentResult,
    PersonRef,
    SortSpec,
    StoredFile,
)
from compliancedocs.domain.enums import DocumentStatus
from compliancedocs.infrastructure.persistence.models.category import (
    Category,
    Subcategory,
)
from compliancedocs.infrastructure.persistence.models.document import Document
from compliancedocs.infrastructure.persistence.models.user import User
from compliancedocs.infrastructure.persistence.repositories.base import BaseRepository

_Uploader = aliased(User, name="uploader")
_Modifier = aliased(User, name="modifier")

# Sort keys accepted by list_documents (validated by the service).
SORT_COLUMNS: dict[str, Any] = {
    "title": Document.title,
    "created_at": Document.created_at,
    "updated_at": Document.updated_at,
    "review_date": Document.review_date,
    "version": Document.version,
    "file_size": Document.file_size,
    "status": Document.status,
    "subcategory": Document.subcategory,
}


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        title=d.title,
        description=d.description,
        category_id=d.category_id,
        subcategory=d.subcategory,
        tags=list(d.tags),
        file_path=d.file.storage_ref,
        file_name=d.file.original_name,
        file_size=d.file.size,
        file_type=d.file.content_type,
        uploaded_by=d.uploaded_by,
        last_modified_by=d.uploaded_by,
        review_date=d.review_date,
        status=DocumentStatus.ACTIVE.value,
        version=1,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        title=d.title,
        description=d.description,
        category_id=d.category_id,
        subcategory=d.subcategory,
        tags=list(d.tags or []),
        file_path=d.file_path,
        file_name=d.file_name,
        file_size=d.file_size,
        file_type=d.file_type,
        uploaded_by=d.uploaded_by,
        last_modified_by=d.last_modified_by,
        review_date=d.review_date,
        status=d.status,
        version=d.version,
        created_at=d.created_at,
        updated_at=d.updated_at,
    )


def _person(user_id: str | None, name: str | None) -> PersonRef | None:
    return PersonRef(id=user_id, name=name or "") if user_id else None


class DocumentRepository(BaseRepository[Document]):
    """Document metadata store. create_document accepts DocumentCreate; reads return DTOs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    def _expanded_select(self) -> Select:
        return (
            select(
                Document,
                Category.name.label("category_name"),
                _Uploader.name.label("uploader_name"),
                _Modifier.name.label("modifier_name"),
            )
            .join(Category, Category.id == Document.category_id)
            .outerjoin(_Uploader, _Uploader.id == Document.uploaded_by)
            .outerjoin(_Modifier, _Modifier.id == Document.last_modified_by)
        )

    @staticmethod
    def _row_to_detail(row: Any, subcategories: list[SubcategoryData] | None = None) -> DocumentDetail:
        doc: Document = row.Document
        return DocumentDetail(
            document=_document_to_result(doc),
            category=CategoryRef(
                id=doc.category_id, name=row.category_name, subcategories=subcategories
            ),
            uploaded_by=_person(doc.uploaded_by, row.uploader_name),
            last_modified_by=_person(doc.last_modified_by, row.modifier_name),
        )

    @staticmethod
    def _apply_filters(stmt: Select, filters: DocumentFilters) -> Select:
        if filters.category_id:
            stmt = stmt.where(Document.category_id == filters.category_id)
        if filters.subcategory:
            stmt = stmt.where(Document.subcategory == filters.subcategory)
        if filters.status:
            stmt = stmt.where(Document.status == filters.status)
        if filters.search and filters.search.strip():
            stmt = stmt.where(
                Document.search_vector.op("@@")(
                    func.plainto_tsquery("simple", filters.search.strip())
                )
            )
        return stmt

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._orm_get(document_id)
        return _document_to_result(row) if row else None

    async def get_detail(self, document_id: str) -> DocumentDetail | None:
        result = await self.db.execute(
            self._expanded_select().where(Document.id == document_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        subs = await self.db.execute(
            select(Subcategory)
            .where(Subcategory.category_id == row.Document.category_id)
            .order_by(Subcategory.position, Subcategory.name)
        )
        subcategories = [
            SubcategoryData(name=s.name, description=s.description)
            for s in subs.scalars().all()
        ]
        return self._row_to_detail(row, subcategories)

    async def list_documents(
        self,
        filters: DocumentFilters,
        sort: SortSpec,
        page: int,
        limit: int,
    ) -> DocumentPage:
        """Return one page of expanded documents; sort.column must be a SORT_COLUMNS key."""
        count_stmt = self._apply_filters(
            select(func.count(Document.id)), filters
        )
        total = (await self.db.execute(count_stmt)).scalar() or 0

        column = SORT_COLUMNS[sort.column]
        order = column.desc() if sort.descending else column.asc()
        stmt = (
            self._apply_filters(self._expanded_select(), filters)
            .order_by(order, Document.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = (await self.db.execute(stmt)).all()
        return DocumentPage(
            documents=[self._row_to_detail(r) for r in rows],
            total=total,
            page=page,
            limit=limit,
        )

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Create document from write-model DTO; return read-model."""
        created = await self._orm_create(_create_to_document(data))
        return _document_to_result(created)

    async def update_document(
        self, document_id: str, changes: DocumentChanges, actor_id: str
    ) -> DocumentResult | None:
        orm = await self._orm_get(document_id)
        if not orm:
            return None
        for name in (
            "title",
            "description",
            "category_id",
            "subcategory",
            "review_date",
            "status",
        ):
            value = getattr(changes, name)
            if value is not None:
                setattr(orm, name, value)
        if changes.tags is not None:
            orm.tags = list(changes.tags)
        orm.last_modified_by = actor_id
        orm.updated_at = func.now()
        updated = await self._orm_save(orm)
        return _document_to_result(updated)

    async def soft_delete(self, document_id: str, actor_id: str) -> DocumentResult | None:
        """Set status deleted; blob and revisions are untouched."""
        orm = await self._orm_get(document_id)
        if not orm:
            return None
        orm.status = DocumentStatus.DELETED.value
        orm.last_modified_by = actor_id
        orm.updated_at = func.now()
        updated = await self._orm_save(orm)
        return _document_to_result(updated)

    async def replace_file_if_version(
        self,
        document_id: str,
        expected_version: int,
        file: StoredFile,
        actor_id: str,
    ) -> DocumentResult | None:
        """Swap the file pointer and increment version only if still current (optimistic lock).

        Returns None if another request won the race.
        """
        stmt = (
            update(Document)
            .where(
                Document.id == document_id,
                Document.version == expected_version,
            )
            .values(
                file_path=file.storage_ref,
                file_name=file.original_name,
                file_size=file.size,
                file_type=file.content_type,
                version=Document.version + 1,
                last_modified_by=actor_id,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            return None
        orm = await self._orm_get(document_id)
        if orm is None:
            return None
        await self.db.refresh(orm)
        return _document_to_result(orm)

    async def count_by_category(self, category_id: str) -> int:
        return await self._count(Document.category_id == category_id)

    async def count_by_subcategory(self, category_id: str, subcategory: str) -> int:
        return await self._count(
            Document.category_id == category_id,
            Document.subcategory == subcategory,
        )

    async def rename_subcategory(
        self, category_id: str, old_name: str, new_name: str
    ) -> int:
        result = await self.db.execute(
            update(Document)
            .where(
                Document.category_id == category_id,
                Document.subcategory == old_name,
            )
            .values(subcategory=new_name)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
