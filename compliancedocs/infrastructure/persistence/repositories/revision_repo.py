"""Revision repository: append-only ledger of superseded document files."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.dtos.document import (
    PersonRef,
    RevisionCreate,
    RevisionResult,
)
from compliancedocs.domain.exceptions import DocumentVersionConflictException
from compliancedocs.infrastructure.persistence.models.revision import Revision
from compliancedocs.infrastructure.persistence.models.user import User
from compliancedocs.infrastructure.persistence.repositories.base import BaseRepository


def _revision_to_result(r: Revision, creator_name: str | None) -> RevisionResult:
    return RevisionResult(
        id=r.id,
        document_id=r.document_id,
        version=r.version,
        file_path=r.file_path,
        file_name=r.file_name,
        file_size=r.file_size,
        file_type=r.file_type,
        changes=r.changes,
        created_by=PersonRef(id=r.created_by, name=creator_name or ""),
        created_at=r.created_at,
    )


class RevisionRepository(BaseRepository[Revision]):
    """Revisions are only inserted and read; there is no update or delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Revision)

    def _with_creator(self):
        return select(Revision, User.name.label("creator_name")).outerjoin(
            User, User.id == Revision.created_by
        )

    async def create_revision(self, data: RevisionCreate) -> RevisionResult:
        """Insert snapshot; a duplicate (document, version) means a concurrent upload won."""
        revision = Revision(
            document_id=data.document_id,
            version=data.version,
            file_path=data.file_path,
            file_name=data.file_name,
            file_size=data.file_size,
            file_type=data.file_type,
            changes=data.changes,
            created_by=data.created_by,
        )
        try:
            async with self.db.begin_nested():
                created = await self._orm_create(revision)
        except IntegrityError:
            raise DocumentVersionConflictException(
                data.document_id, data.version
            ) from None
        creator = await self.db.scalar(select(User.name).where(User.id == data.created_by))
        return _revision_to_result(created, creator)

    async def list_for_document(self, document_id: str) -> list[RevisionResult]:
        result = await self.db.execute(
            self._with_creator()
            .where(Revision.document_id == document_id)
            .order_by(Revision.version.desc())
        )
        return [_revision_to_result(row.Revision, row.creator_name) for row in result.all()]

    async def get_by_version(
        self, document_id: str, version: int
    ) -> RevisionResult | None:
        result = await self.db.execute(
            self._with_creator().where(
                Revision.document_id == document_id,
                Revision.version == version,
            )
        )
        row = result.one_or_none()
        return _revision_to_result(row.Revision, row.creator_name) if row else None

    async def count_for_document(self, document_id: str) -> int:
        return await self._count(Revision.document_id == document_id)
