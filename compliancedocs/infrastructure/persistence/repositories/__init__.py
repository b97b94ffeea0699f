"""SQLAlchemy repositories returning application DTOs."""

from compliancedocs.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from compliancedocs.infrastructure.persistence.repositories.document_repo import (
    SORT_COLUMNS,
    DocumentRepository,
)
from compliancedocs.infrastructure.persistence.repositories.revision_repo import (
    RevisionRepository,
)
from compliancedocs.infrastructure.persistence.repositories.user_repo import (
    UserRepository,
)

__all__ = [
    "SORT_COLUMNS",
    "CategoryRepository",
    "DocumentRepository",
    "RevisionRepository",
    "UserRepository",
]
