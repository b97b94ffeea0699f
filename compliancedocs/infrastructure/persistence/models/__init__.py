"""Persistence models: ORM entities and mixins."""

from compliancedocs.infrastructure.persistence.models.category import (
    Category,
    Subcategory,
)
from compliancedocs.infrastructure.persistence.models.document import Document
from compliancedocs.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)
from compliancedocs.infrastructure.persistence.models.notification import Notification
from compliancedocs.infrastructure.persistence.models.revision import Revision
from compliancedocs.infrastructure.persistence.models.user import User

__all__ = [
    "Category",
    "CreatedAtMixin",
    "CuidMixin",
    "Document",
    "Notification",
    "Revision",
    "Subcategory",
    "TimestampMixin",
    "User",
    "VersionedMixin",
]
