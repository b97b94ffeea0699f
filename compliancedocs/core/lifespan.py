"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the upload directory,
optional schema creation and seeding, and engine dispose. No business
logic here.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from compliancedocs.core.config import Settings, get_settings
from compliancedocs.shared.logging import setup_logging

logger = logging.getLogger(__name__)


async def _create_schema() -> None:
    """create_all for local development (AUTO_CREATE_SCHEMA); production uses Alembic."""
    from compliancedocs.infrastructure.persistence import database
    from compliancedocs.infrastructure.persistence import models  # noqa: F401

    database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    logger.info("Database schema ensured (create_all)")


async def seed_defaults(settings: Settings) -> None:
    """Create the bootstrap admin and default categories if missing."""
    from compliancedocs.application.services.bootstrap_service import BootstrapService
    from compliancedocs.infrastructure.persistence.database import get_session_factory
    from compliancedocs.infrastructure.persistence.repositories import (
        CategoryRepository,
        UserRepository,
    )
    from compliancedocs.infrastructure.security import BcryptPasswordHasher

    session_factory = get_session_factory()
    async with session_factory() as session:
        async with session.begin():
            service = BootstrapService(
                UserRepository(session),
                CategoryRepository(session),
                BcryptPasswordHasher(),
            )
            await service.run(
                settings.bootstrap_admin_email,
                settings.bootstrap_admin_password.get_secret_value(),
            )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()
    setup_logging(settings.debug)

    # ---- Startup ----
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    logger.info("Upload storage at %s", settings.storage_root)

    if settings.auto_create_schema:
        await _create_schema()
    if settings.seed_defaults:
        await seed_defaults(settings)

    yield

    # ---- Shutdown ----
    from compliancedocs.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
