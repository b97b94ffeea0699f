"""Document ORM model. Current file pointer, classification, and version counter."""

from datetime import datetime

from sqlalchemy import DDL, BigInteger, DateTime, ForeignKey, Index, String, Text, event
from sqlalchemy.dialects.postgresql import ARRAY, TSVECTOR
from sqlalchemy.orm import Mapped, mapped_column

from compliancedocs.domain.enums import DocumentStatus
from compliancedocs.infrastructure.persistence.database import Base
from compliancedocs.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)


class Document(CuidMixin, TimestampMixin, VersionedMixin, Base):
    """Document entity. Table: document.

    version starts at 1 and equals 1 + number of revisions. search_vector
    is maintained by a database trigger (see SEARCH_VECTOR_TRIGGER_SQL).
    """

    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )
    category_id: Mapped[str] = mapped_column(
        String, ForeignKey("category.id"), nullable=False, index=True
    )
    subcategory: Mapped[str] = mapped_column(String(200), nullable=False)
    tags: Mapped[list[str]] = mapped_column(
        ARRAY(String), nullable=False, default=list, server_default="{}"
    )
    file_path: Mapped[str] = mapped_column(String, nullable=False)
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)
    uploaded_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    last_modified_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False
    )
    review_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DocumentStatus.ACTIVE.value,
        server_default=DocumentStatus.ACTIVE.value,
        index=True,
    )
    search_vector: Mapped[str | None] = mapped_column(TSVECTOR, nullable=True)

    __table_args__ = (
        Index("ix_document_category_subcategory", "category_id", "subcategory"),
        Index("ix_document_updated_at", "updated_at"),
        Index("ix_document_search_vector", "search_vector", postgresql_using="gin"),
    )


# Shared with the initial migration so create_all and Alembic install the same trigger.
SEARCH_VECTOR_FUNCTION_SQL = """
CREATE OR REPLACE FUNCTION document_search_vector_fn()
RETURNS trigger AS $$
BEGIN
  NEW.search_vector := to_tsvector('simple',
    coalesce(NEW.title, '') || ' ' || coalesce(NEW.description, '') || ' '
    || coalesce(NEW.subcategory, '') || ' '
    || coalesce(array_to_string(NEW.tags, ' '), ''));
  RETURN NEW;
END;
$$ LANGUAGE plpgsql
"""

SEARCH_VECTOR_TRIGGER_SQL = """
CREATE TRIGGER document_search_vector_trigger
BEFORE INSERT OR UPDATE ON document
FOR EACH ROW EXECUTE FUNCTION document_search_vector_fn()
"""

event.listen(
    Document.__table__,
    "after_create",
    DDL(SEARCH_VECTOR_FUNCTION_SQL).execute_if(dialect="postgresql"),
)
event.listen(
    Document.__table__,
    "after_create",
    DDL(SEARCH_VECTOR_TRIGGER_SQL).execute_if(dialect="postgresql"),
)
