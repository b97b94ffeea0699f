"""Access guard: turn a raw token into an authenticated identity."""

from __future__ import annotations

import logging

from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.application.interfaces.repositories import IUserRepository
from compliancedocs.application.interfaces.services import ITokenService
from compliancedocs.domain.exceptions import (
    AccountDisabledException,
    InvalidTokenException,
    UnauthenticatedException,
)

logger = logging.getLogger(__name__)


class AccessGuard:
    """Validates the token and re-checks the user (exists, active) on every call.

    The role in the returned identity comes from the store, not the token,
    so role changes take effect without re-login.
    """

    def __init__(self, token_service: ITokenService, user_repo: IUserRepository) -> None:
        self.token_service = token_service
        self.user_repo = user_repo

    async def authenticate(self, token: str | None) -> AuthenticatedIdentity:
        if not token or not token.strip():
            raise UnauthenticatedException()
        try:
            claims = self.token_service.decode(token.strip())
        except ValueError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenException() from None
        user_id = claims.get("sub")
        if not user_id:
            raise InvalidTokenException()
        user = await self.user_repo.get_by_id(str(user_id))
        if user is None:
            raise UnauthenticatedException("User no longer exists")
        if not user.is_active:
            raise AccountDisabledException()
        return AuthenticatedIdentity(user_id=user.id, role=user.role)
