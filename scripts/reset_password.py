"""Reset a user's password, and optionally reactivate the account.

Usage:
    python -m scripts.reset_password <email> <new_password> [--activate]
"""

import asyncio
import sys

from compliancedocs.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from compliancedocs.infrastructure.persistence.repositories import UserRepository
from compliancedocs.infrastructure.security import BcryptPasswordHasher


async def main() -> None:
    args = [a for a in sys.argv[1:] if a != "--activate"]
    activate = "--activate" in sys.argv[1:]
    if len(args) < 2:
        print(
            "Usage: python -m scripts.reset_password <email> <new_password> [--activate]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, new_password = args[0], args[1]

    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                user_repo = UserRepository(session)
                user = await user_repo.get_by_email(email)
                if user is None:
                    print(f"User not found: {email}", file=sys.stderr)
                    sys.exit(1)
                await user_repo.update_password(
                    user.id, await BcryptPasswordHasher().hash(new_password)
                )
                if activate:
                    await user_repo.set_active(user.id, True)
    finally:
        await dispose_engine()
    print(f"Password reset for user {user.id} ({user.email})")


if __name__ == "__main__":
    asyncio.run(main())
