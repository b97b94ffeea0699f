"""Application services: credentials, access guard, authorization policy, bootstrap."""

from compliancedocs.application.services.access_guard import AccessGuard
from compliancedocs.application.services.authorization_service import (
    AuthorizationService,
)
from compliancedocs.application.services.bootstrap_service import BootstrapService
from compliancedocs.application.services.credential_service import CredentialService

__all__ = [
    "AccessGuard",
    "AuthorizationService",
    "BootstrapService",
    "CredentialService",
]
