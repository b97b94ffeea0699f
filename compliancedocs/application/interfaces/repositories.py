"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from compliancedocs.application.dtos.category import CategoryResult, SubcategoryData
    from compliancedocs.application.dtos.document import (
        DocumentChanges,
        DocumentCreate,
        DocumentDetail,
        DocumentFilters,
        DocumentPage,
        DocumentResult,
        RevisionCreate,
        RevisionResult,
        SortSpec,
        StoredFile,
    )
    from compliancedocs.application.dtos.user import (
        UserCreate,
        UserCredentials,
        UserResult,
    )


class IUserRepository(Protocol):
    """Protocol for the identity store."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by id (no password hash)."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by email (case-insensitive)."""

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return user plus hash for login."""

    async def get_credentials_by_id(self, user_id: str) -> UserCredentials | None:
        """Return user plus hash for change-password."""

    async def create_user(self, data: UserCreate) -> UserResult:
        """Create user; raise DuplicateUserException if the email is taken."""

    async def record_login(self, user_id: str, at: datetime) -> None:
        """Set last_login."""

    async def update_password(self, user_id: str, hashed_password: str) -> bool:
        """Replace the hash; return False if the user does not exist."""

    async def set_active(self, user_id: str, is_active: bool) -> bool:
        """Activate or deactivate; return False if the user does not exist."""


class ICategoryRepository(Protocol):
    """Protocol for the category catalog store."""

    async def list_all(self) -> list[CategoryResult]:
        """Return all categories ordered by name, each with ordered subcategories."""

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        """Return category with subcategories."""

    async def get_by_name(self, name: str) -> CategoryResult | None:
        """Return category with this exact name."""

    async def create_category(
        self,
        name: str,
        description: str,
        subcategories: list[SubcategoryData],
    ) -> CategoryResult:
        """Insert category and its subcategories in the given order."""

    async def update_category(
        self, category_id: str, name: str | None, description: str | None
    ) -> CategoryResult | None:
        """Apply given fields; None if the category does not exist."""

    async def delete_category(self, category_id: str) -> bool:
        """Delete category and its subcategories."""

    async def add_subcategory(
        self, category_id: str, sub: SubcategoryData
    ) -> CategoryResult:
        """Append a subcategory at the end of the list."""

    async def update_subcategory(
        self,
        category_id: str,
        name: str,
        new_name: str | None,
        description: str | None,
    ) -> CategoryResult:
        """Rename and/or redescribe a subcategory."""

    async def remove_subcategory(self, category_id: str, name: str) -> CategoryResult:
        """Remove a subcategory by name."""

    async def count(self) -> int:
        """Return number of categories (bootstrap check)."""


class IDocumentRepository(Protocol):
    """Protocol for document metadata persistence and queries."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return the document row (ids only)."""

    async def get_detail(self, document_id: str) -> DocumentDetail | None:
        """Return the document with category (incl. subcategories) and user names."""

    async def list_documents(
        self,
        filters: DocumentFilters,
        sort: SortSpec,
        page: int,
        limit: int,
    ) -> DocumentPage:
        """Filtered, sorted, paginated, expanded listing."""

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Insert with version 1 and status active."""

    async def update_document(
        self, document_id: str, changes: DocumentChanges, actor_id: str
    ) -> DocumentResult | None:
        """Apply non-None fields and set last_modified_by."""

    async def soft_delete(self, document_id: str, actor_id: str) -> DocumentResult | None:
        """Set status deleted and last_modified_by."""

    async def replace_file_if_version(
        self,
        document_id: str,
        expected_version: int,
        file: StoredFile,
        actor_id: str,
    ) -> DocumentResult | None:
        """Point at the new blob and bump version only if still at expected_version."""

    async def count_by_category(self, category_id: str) -> int:
        """Count documents of any status referencing the category."""

    async def count_by_subcategory(self, category_id: str, subcategory: str) -> int:
        """Count documents of any status referencing (category, subcategory)."""

    async def rename_subcategory(
        self, category_id: str, old_name: str, new_name: str
    ) -> int:
        """Bulk update denormalized subcategory name; return affected rows."""


class IRevisionRepository(Protocol):
    """Protocol for the append-only revision ledger."""

    async def create_revision(self, data: RevisionCreate) -> RevisionResult:
        """Insert a revision snapshot."""

    async def list_for_document(self, document_id: str) -> list[RevisionResult]:
        """Return revisions newest version first, with creator name."""

    async def get_by_version(
        self, document_id: str, version: int
    ) -> RevisionResult | None:
        """Return the revision with exactly this (document, version)."""

    async def count_for_document(self, document_id: str) -> int:
        """Return the number of revisions for a document."""
