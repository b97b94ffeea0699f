"""Revision ORM model. Immutable snapshot of a superseded document file."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from compliancedocs.infrastructure.persistence.database import Base
from compliancedocs.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
)


class Revision(CuidMixin, CreatedAtMixin, Base):
    """Prior version of a document. Table: revision. Unique (document_id, version)."""

    __tablename__ = "revision"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    file_path: Mapped[str] = mapped_column(String, nullable=False)
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)
    changes: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )
    created_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("document_id", "version", name="uq_revision_document_version"),
    )
