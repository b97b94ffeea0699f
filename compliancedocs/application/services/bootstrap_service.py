"""Bootstrap: default administrator and the default compliance category tree.

Idempotent. Run from the app lifespan when SEED_DEFAULTS is true, or from
scripts/seed_defaults.py.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from compliancedocs.application.dtos.category import SubcategoryData
from compliancedocs.application.dtos.user import UserCreate
from compliancedocs.application.interfaces.repositories import (
    ICategoryRepository,
    IUserRepository,
)
from compliancedocs.application.interfaces.services import IPasswordHasher
from compliancedocs.domain.enums import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultCategory:
    name: str
    description: str
    subcategories: tuple[SubcategoryData, ...]


DEFAULT_CATEGORIES: tuple[DefaultCategory, ...] = (
    DefaultCategory(
        "Governing documentation",
        "Top-level documents that define guidelines and policies",
        (
            SubcategoryData("Information security policy", "Top-level guidelines for information security"),
            SubcategoryData("Risk management policy", "Guidelines for risk management"),
            SubcategoryData("Roles and responsibilities", "Security and privacy roles and responsibilities"),
            SubcategoryData("Management review", "Records of management reviews"),
        ),
    ),
    DefaultCategory(
        "Implementing documentation",
        "Documents describing how policies are implemented",
        (
            SubcategoryData("Risk assessments", "Completed risk assessments"),
            SubcategoryData("Personal data processing procedures", "Procedures for processing personal data"),
            SubcategoryData("Data processing agreements", "Agreements with data processors"),
            SubcategoryData("Technical measures", "Technical security measures"),
        ),
    ),
    DefaultCategory(
        "Controlling documentation",
        "Documents that verify compliance",
        (
            SubcategoryData("Nonconformity handling", "Nonconformities and how they were handled"),
            SubcategoryData("Internal audits", "Internal audit reports"),
            SubcategoryData("Security objectives and measures", "Defined security objectives and measures"),
        ),
    ),
    DefaultCategory(
        "ISO 27001 requirements",
        "Documents specific to ISO 27001 compliance",
        (
            SubcategoryData("Statement of Applicability (SoA)", "Statement of Applicability"),
            SubcategoryData("Treatment plan (Annex A)", "Implementation of Annex A controls"),
            SubcategoryData("Incident response plan", "Plan for handling security incidents"),
        ),
    ),
    DefaultCategory(
        "Data protection authority requirements",
        "Documents for compliance with the data protection authority",
        (
            SubcategoryData("Privacy notice", "Privacy notice for internal and external parties"),
            SubcategoryData("Record of processing activities", "Register of processing activities"),
            SubcategoryData("Consent management", "Procedures and records for consent management"),
        ),
    ),
)


class BootstrapService:
    """Creates the initial administrator and default categories when absent."""

    def __init__(
        self,
        user_repo: IUserRepository,
        category_repo: ICategoryRepository,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_repo = user_repo
        self.category_repo = category_repo
        self.password_hasher = password_hasher

    async def ensure_admin(self, email: str, password: str) -> bool:
        """Create the admin user if no user has this email. Returns True if created."""
        if not password:
            logger.warning("Bootstrap admin password not set; skipping admin creation")
            return False
        if await self.user_repo.get_by_email(email):
            return False
        await self.user_repo.create_user(
            UserCreate(
                email=email.strip().lower(),
                name="Administrator",
                hashed_password=await self.password_hasher.hash(password),
                role=UserRole.ADMIN.value,
                department="IT",
            )
        )
        logger.info("Created bootstrap administrator %s", email)
        return True

    async def ensure_default_categories(self) -> int:
        """Create the default category tree if the catalog is empty. Returns categories created."""
        if await self.category_repo.count() > 0:
            return 0
        for category in DEFAULT_CATEGORIES:
            await self.category_repo.create_category(
                category.name, category.description, list(category.subcategories)
            )
        logger.info("Created %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)

    async def run(self, admin_email: str, admin_password: str) -> None:
        await self.ensure_admin(admin_email, admin_password)
        await self.ensure_default_categories()
