"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.application.dtos.user import UserCreate, UserCredentials, UserResult
from compliancedocs.domain.exceptions import DuplicateUserException
from compliancedocs.infrastructure.persistence.models.user import User
from compliancedocs.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        name=u.name,
        role=u.role,
        department=u.department,
        is_active=u.is_active,
        last_login=u.last_login,
        created_at=u.created_at,
    )


class UserRepository(BaseRepository[User]):
    """Identity store: lookups, create_user, record_login, update_password, set_active."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_orm_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self._orm_get(user_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        user = await self._get_orm_by_email(email)
        return _user_to_result(user) if user else None

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        user = await self._get_orm_by_email(email)
        if not user:
            return None
        return UserCredentials(user=_user_to_result(user), hashed_password=user.hashed_password)

    async def get_credentials_by_id(self, user_id: str) -> UserCredentials | None:
        user = await self._orm_get(user_id)
        if not user:
            return None
        return UserCredentials(user=_user_to_result(user), hashed_password=user.hashed_password)

    async def create_user(self, data: UserCreate) -> UserResult:
        """Create user; raise DuplicateUserException on unique constraint violation."""
        if await self._get_orm_by_email(data.email):
            raise DuplicateUserException()
        user = User(
            email=data.email.strip().lower(),
            name=data.name,
            hashed_password=data.hashed_password,
            role=data.role,
            department=data.department,
            is_active=True,
        )
        try:
            async with self.db.begin_nested():
                created = await self._orm_create(user)
        except IntegrityError:
            raise DuplicateUserException() from None
        return _user_to_result(created)

    async def record_login(self, user_id: str, at: datetime) -> None:
        await self.db.execute(
            update(User).where(User.id == user_id).values(last_login=at)
        )

    async def update_password(self, user_id: str, hashed_password: str) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(hashed_password=hashed_password, updated_at=func.now())
        )
        return result.rowcount == 1

    async def set_active(self, user_id: str, is_active: bool) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(is_active=is_active, updated_at=func.now())
        )
        return result.rowcount == 1
