"""Create a user directly in the database.

Usage:
    python -m scripts.create_user <email> <name> [role] [password]
role defaults to employee. If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from compliancedocs.application.dtos.user import UserCreate
from compliancedocs.domain.enums import UserRole
from compliancedocs.domain.exceptions import DuplicateUserException
from compliancedocs.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from compliancedocs.infrastructure.persistence.repositories import UserRepository
from compliancedocs.infrastructure.security import BcryptPasswordHasher


async def main() -> None:
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_user <email> <name> [role] [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    name = sys.argv[2]
    role = sys.argv[3] if len(sys.argv) > 3 else UserRole.EMPLOYEE.value
    password = sys.argv[4] if len(sys.argv) > 4 else secrets.token_urlsafe(12)
    if role not in UserRole.values():
        print(f"Unknown role {role!r}; expected one of {UserRole.values()}", file=sys.stderr)
        sys.exit(1)

    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                user_repo = UserRepository(session)
                hashed = await BcryptPasswordHasher().hash(password)
                try:
                    user = await user_repo.create_user(
                        UserCreate(
                            email=email,
                            name=name,
                            hashed_password=hashed,
                            role=role,
                            department="",
                        )
                    )
                except DuplicateUserException:
                    print(f"User already exists: {email}", file=sys.stderr)
                    sys.exit(1)
    finally:
        await dispose_engine()
    print(f"Created user: {user.id} ({user.email}, {user.role})")
    if len(sys.argv) <= 4:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
