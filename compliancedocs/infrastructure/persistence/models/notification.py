"""Notification ORM model. Persisted only; no API route reads or writes it yet."""

from sqlalchemy import Boolean, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from compliancedocs.infrastructure.persistence.database import Base
from compliancedocs.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
)


class Notification(CuidMixin, CreatedAtMixin, Base):
    """User notification (e.g. review due). Table: notification."""

    __tablename__ = "notification"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    document_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("document.id", ondelete="SET NULL"), nullable=True
    )
    kind: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
