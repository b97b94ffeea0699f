"""Application ports (Protocols) implemented by infrastructure."""

from compliancedocs.application.interfaces.repositories import (
    ICategoryRepository,
    IDocumentRepository,
    IRevisionRepository,
    IUserRepository,
)
from compliancedocs.application.interfaces.services import (
    IFileStore,
    IPasswordHasher,
    ITokenService,
)

__all__ = [
    "ICategoryRepository",
    "IDocumentRepository",
    "IFileStore",
    "IPasswordHasher",
    "IRevisionRepository",
    "ITokenService",
    "IUserRepository",
]
