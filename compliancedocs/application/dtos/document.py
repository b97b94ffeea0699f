"""DTOs for document and revision use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from compliancedocs.application.dtos.category import SubcategoryData


@dataclass(frozen=True)
class StoredFile:
    """Blob written by the file store: relative reference plus client-facing metadata."""

    storage_ref: str
    original_name: str
    size: int
    content_type: str


@dataclass(frozen=True)
class PersonRef:
    """User id with display name (joined on read)."""

    id: str
    name: str


@dataclass(frozen=True)
class CategoryRef:
    """Category id with name; subcategories are filled for single-document reads."""

    id: str
    name: str
    subcategories: list[SubcategoryData] | None = None


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model)."""

    title: str
    description: str
    category_id: str
    subcategory: str
    tags: list[str]
    file: StoredFile
    uploaded_by: str
    review_date: datetime


@dataclass(frozen=True)
class DocumentResult:
    """Document row read-model (ids only, no joined names)."""

    id: str
    title: str
    description: str
    category_id: str
    subcategory: str
    tags: list[str]
    file_path: str
    file_name: str
    file_size: int
    file_type: str
    uploaded_by: str
    last_modified_by: str
    review_date: datetime
    status: str
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DocumentDetail:
    """Document read-model expanded with category and user names."""

    document: DocumentResult
    category: CategoryRef
    uploaded_by: PersonRef | None
    last_modified_by: PersonRef | None


@dataclass(frozen=True)
class DocumentChanges:
    """Partial update; None means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    category_id: str | None = None
    subcategory: str | None = None
    tags: list[str] | None = None
    review_date: datetime | None = None
    status: str | None = None


@dataclass(frozen=True)
class DocumentFilters:
    category_id: str | None = None
    subcategory: str | None = None
    status: str | None = "active"
    search: str | None = None


@dataclass(frozen=True)
class SortSpec:
    column: str = "updated_at"
    descending: bool = True


@dataclass(frozen=True)
class DocumentPage:
    """One page of expanded documents with pagination totals."""

    documents: list[DocumentDetail] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@dataclass(frozen=True)
class RevisionCreate:
    """Snapshot of the document's current pointer before it is replaced."""

    document_id: str
    version: int
    file_path: str
    file_name: str
    file_size: int
    file_type: str
    changes: str
    created_by: str


@dataclass(frozen=True)
class RevisionResult:
    id: str
    document_id: str
    version: int
    file_path: str
    file_name: str
    file_size: int
    file_type: str
    changes: str
    created_by: PersonRef | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class FileDownload:
    """What a download route needs: blob reference, client name, and MIME type."""

    storage_ref: str
    file_name: str
    file_type: str
    file_size: int
