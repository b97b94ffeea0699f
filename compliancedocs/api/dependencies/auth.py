"""Auth dependencies: token extraction, access guard, credential service, role gate."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.application.services.access_guard import AccessGuard
from compliancedocs.application.services.authorization_service import (
    AuthorizationService,
)
from compliancedocs.application.services.credential_service import CredentialService
from compliancedocs.core.config import get_settings
from compliancedocs.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from compliancedocs.infrastructure.persistence.repositories import UserRepository
from compliancedocs.infrastructure.security import (
    BcryptPasswordHasher,
    JWTTokenService,
)
from compliancedocs.shared.context import set_current_user

_password_hasher = BcryptPasswordHasher()
_authorization = AuthorizationService()


def get_token_service() -> JWTTokenService:
    settings = get_settings()
    return JWTTokenService(
        secret_key=settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


def get_password_hasher() -> BcryptPasswordHasher:
    return _password_hasher


def get_authorization_service() -> AuthorizationService:
    return _authorization


def extract_token(request: Request) -> str | None:
    """Token from the configured header, falling back to Authorization: Bearer."""
    token = request.headers.get(get_settings().auth_header_name)
    if token:
        return token.strip()
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def get_access_guard(
    db: Annotated[AsyncSession, Depends(get_db)],
    token_service: Annotated[JWTTokenService, Depends(get_token_service)],
) -> AccessGuard:
    return AccessGuard(token_service, UserRepository(db))


async def get_current_identity(
    request: Request,
    guard: Annotated[AccessGuard, Depends(get_access_guard)],
) -> AuthenticatedIdentity:
    """Authenticate the request; store the identity on request.state and in the log context."""
    identity = await guard.authenticate(extract_token(request))
    request.state.identity = identity
    set_current_user(identity.user_id, identity.role)
    return identity


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]


def require_permission(resource: str, action: str):
    """Dependency factory: authenticated identity whose role may perform resource:action."""

    async def _check(
        identity: CurrentIdentity,
        authorization: Annotated[
            AuthorizationService, Depends(get_authorization_service)
        ],
    ) -> AuthenticatedIdentity:
        authorization.require_permission(identity, resource, action)
        return identity

    return _check


async def get_credential_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    token_service: Annotated[JWTTokenService, Depends(get_token_service)],
    password_hasher: Annotated[BcryptPasswordHasher, Depends(get_password_hasher)],
) -> CredentialService:
    """CredentialService on a request transaction (register, login, change-password)."""
    return CredentialService(
        UserRepository(db),
        password_hasher,
        token_service,
        allow_role_on_register=get_settings().registration_allows_role,
    )
