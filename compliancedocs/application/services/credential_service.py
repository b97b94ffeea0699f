"""Credential service: register, login, change password, profile.

Passwords are hashed by an injected IPasswordHasher and tokens issued by an
injected ITokenService, so this module has no crypto or settings imports.
"""

from __future__ import annotations

import logging
import re

from compliancedocs.application.dtos.user import AuthResult, UserCreate, UserResult
from compliancedocs.application.interfaces.repositories import IUserRepository
from compliancedocs.application.interfaces.services import (
    IPasswordHasher,
    ITokenService,
)
from compliancedocs.domain.enums import UserRole
from compliancedocs.domain.exceptions import (
    DuplicateUserException,
    InvalidCredentialsException,
    ResourceNotFoundException,
    ValidationException,
)
from compliancedocs.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationException(f"{field} is required", field=field)
    return value


def _normalize_email(email: str | None) -> str:
    email = _require(email, "email").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationException("Please include a valid email", field="email")
    return email


class CredentialService:
    """Issues tokens for valid credentials and manages password hashes."""

    def __init__(
        self,
        user_repo: IUserRepository,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        *,
        allow_role_on_register: bool = True,
    ) -> None:
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.allow_role_on_register = allow_role_on_register

    async def register(
        self,
        email: str | None,
        name: str | None,
        password: str | None,
        department: str | None = None,
        role: str | None = None,
    ) -> AuthResult:
        """Create a user and return a token. DuplicateUser if the email is taken."""
        email = _normalize_email(email)
        name = _require(name, "name").strip()
        password = _require(password, "password")
        resolved_role = UserRole.EMPLOYEE.value
        if role and self.allow_role_on_register:
            if role not in UserRole.values():
                raise ValidationException(
                    f"role must be one of: {', '.join(UserRole.values())}", field="role"
                )
            resolved_role = role

        if await self.user_repo.get_by_email(email):
            raise DuplicateUserException()
        hashed = await self.password_hasher.hash(password)
        user = await self.user_repo.create_user(
            UserCreate(
                email=email,
                name=name,
                hashed_password=hashed,
                role=resolved_role,
                department=(department or "").strip(),
            )
        )
        logger.info("Registered user %s with role %s", user.id, user.role)
        return AuthResult(token=self.token_service.issue(user.id, user.role), user=user)

    async def login(self, email: str | None, password: str | None) -> AuthResult:
        """Verify credentials and return a token.

        Unknown email and wrong password raise the same error; a correct
        password on a deactivated account raises a distinct message.
        """
        email = _normalize_email(email)
        password = _require(password, "password")
        creds = await self.user_repo.get_credentials_by_email(email)
        if creds is None:
            await self.password_hasher.verify_dummy(password)
            logger.info("Failed login for unknown email")
            raise InvalidCredentialsException()
        if not await self.password_hasher.verify(password, creds.hashed_password):
            logger.info("Failed login for user %s: wrong password", creds.user.id)
            raise InvalidCredentialsException()
        if not creds.user.is_active:
            logger.info("Rejected login for deactivated user %s", creds.user.id)
            raise InvalidCredentialsException(InvalidCredentialsException.DEACTIVATED)

        await self.user_repo.record_login(creds.user.id, utc_now())
        user = creds.user
        return AuthResult(token=self.token_service.issue(user.id, user.role), user=user)

    async def change_password(
        self,
        user_id: str,
        current_password: str | None,
        new_password: str | None,
    ) -> None:
        current_password = _require(current_password, "current_password")
        new_password = _require(new_password, "new_password")
        creds = await self.user_repo.get_credentials_by_id(user_id)
        if creds is None:
            raise ResourceNotFoundException("user", user_id)
        if not await self.password_hasher.verify(current_password, creds.hashed_password):
            raise InvalidCredentialsException("Current password is incorrect")
        hashed = await self.password_hasher.hash(new_password)
        await self.user_repo.update_password(user_id, hashed)
        logger.info("Password changed for user %s", user_id)

    async def get_profile(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    @staticmethod
    def logout() -> str:
        """Tokens are stateless; the client discards its copy."""
        return "Logged out successfully"
