"""Category and Subcategory ORM models. Subcategory names are unique within a category."""

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from compliancedocs.infrastructure.persistence.database import Base
from compliancedocs.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


class Category(CuidMixin, TimestampMixin, Base):
    """Document category. Table: category. Unique name."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )


class Subcategory(CuidMixin, Base):
    """Ordered subcategory of a category. Table: subcategory.

    Documents reference subcategories by name (denormalized), so renames
    are cascaded by the catalog service.
    """

    __tablename__ = "subcategory"

    category_id: Mapped[str] = mapped_column(
        String, ForeignKey("category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_subcategory_category_name"),
    )
