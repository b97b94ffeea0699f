"""Application DTOs: frozen dataclasses passed between services and repositories."""

from compliancedocs.application.dtos.category import CategoryResult, SubcategoryData
from compliancedocs.application.dtos.document import (
    CategoryRef,
    DocumentChanges,
    DocumentCreate,
    DocumentDetail,
    DocumentFilters,
    DocumentPage,
    DocumentResult,
    FileDownload,
    PersonRef,
    RevisionCreate,
    RevisionResult,
    SortSpec,
    StoredFile,
)
from compliancedocs.application.dtos.user import (
    AuthenticatedIdentity,
    AuthResult,
    UserCreate,
    UserCredentials,
    UserResult,
)

__all__ = [
    "AuthResult",
    "AuthenticatedIdentity",
    "CategoryRef",
    "CategoryResult",
    "DocumentChanges",
    "DocumentCreate",
    "DocumentDetail",
    "DocumentFilters",
    "DocumentPage",
    "DocumentResult",
    "FileDownload",
    "PersonRef",
    "RevisionCreate",
    "RevisionResult",
    "SortSpec",
    "StoredFile",
    "SubcategoryData",
    "UserCreate",
    "UserCredentials",
    "UserResult",
]
