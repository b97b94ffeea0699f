"""Create the bootstrap administrator and the default compliance categories.

Usage:
    python -m scripts.seed_defaults
Reads BOOTSTRAP_ADMIN_EMAIL / BOOTSTRAP_ADMIN_PASSWORD from the environment.
Safe to run repeatedly: existing admin and a non-empty catalog are left alone.
"""

import asyncio

from compliancedocs.core.config import get_settings
from compliancedocs.core.lifespan import seed_defaults
from compliancedocs.infrastructure.persistence.database import dispose_engine
from compliancedocs.shared.logging import setup_logging


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.debug)
    try:
        await seed_defaults(settings)
    finally:
        await dispose_engine()
    print("Seed complete")


if __name__ == "__main__":
    asyncio.run(main())
