"""User ORM model for authentication."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, text
from sqlalchemy.orm import Mapped, mapped_column

from compliancedocs.domain.enums import AuthProvider, UserRole
from compliancedocs.infrastructure.persistence.database import Base
from compliancedocs.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is globally unique; users are never hard-deleted."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.EMPLOYEE.value
    )
    department: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    auth_provider: Mapped[str] = mapped_column(
        String(32), nullable=False, default=AuthProvider.LOCAL.value
    )
