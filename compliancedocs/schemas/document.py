"""Document and revision API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from compliancedocs.application.dtos.document import (
    DocumentDetail,
    DocumentPage,
    DocumentResult,
    RevisionResult,
)
from compliancedocs.schemas.category import SubcategoryResponse


class PersonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CategoryRefResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    subcategories: list[SubcategoryResponse] | None = None


class DocumentUpdate(BaseModel):
    """Request body for PUT /documents/{id} (partial)."""

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    category: str | None = None
    subcategory: str | None = Field(default=None, max_length=255)
    tags: list[str] | str | None = None
    review_date: datetime | None = None
    status: str | None = None


class DocumentResponse(BaseModel):
    """Document with category and user references expanded."""

    id: str
    title: str
    description: str
    category: CategoryRefResponse
    subcategory: str
    tags: list[str]
    file_name: str
    file_size: int
    file_type: str
    uploaded_by: PersonResponse | None
    last_modified_by: PersonResponse | None
    review_date: datetime
    status: str
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_detail(cls, detail: DocumentDetail) -> "DocumentResponse":
        doc = detail.document
        return cls(
            id=doc.id,
            title=doc.title,
            description=doc.description,
            category=CategoryRefResponse.model_validate(detail.category),
            subcategory=doc.subcategory,
            tags=list(doc.tags),
            file_name=doc.file_name,
            file_size=doc.file_size,
            file_type=doc.file_type,
            uploaded_by=PersonResponse.model_validate(detail.uploaded_by)
            if detail.uploaded_by
            else None,
            last_modified_by=PersonResponse.model_validate(detail.last_modified_by)
            if detail.last_modified_by
            else None,
            review_date=doc.review_date,
            status=doc.status,
            version=doc.version,
            created_at=doc.created_at,
            updated_at=doc.updated_at,
        )


class DocumentRecordResponse(BaseModel):
    """Document row after a write (ids only, no joined names)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    category_id: str
    subcategory: str
    tags: list[str]
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

    @classmethod
    def from_result(cls, result: DocumentResult) -> "DocumentRecordResponse":
        return cls.model_validate(result)


class PaginationResponse(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class DocumentListResponse(BaseModel):
    documents: list[DocumentResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: DocumentPage) -> "DocumentListResponse":
        return cls(
            documents=[DocumentResponse.from_detail(d) for d in page.documents],
            pagination=PaginationResponse(
                total=page.total, page=page.page, limit=page.limit, pages=page.pages
            ),
        )


class RevisionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    version: int
    file_name: str
    file_size: int
    file_type: str
    changes: str
    created_by: PersonResponse | None
    created_at: datetime | None = None

    @classmethod
    def from_result(cls, result: RevisionResult) -> "RevisionResponse":
        return cls.model_validate(result)
