"""Tests for BootstrapService (default admin and default categories)."""

from compliancedocs.application.services import BootstrapService
from compliancedocs.application.services.bootstrap_service import DEFAULT_CATEGORIES


async def test_seeds_admin_and_categories_once(store, hasher) -> None:
    svc = BootstrapService(store.users, store.categories, hasher)
    await svc.run("Admin@Example.com", "admin-password")
    admin = await store.users.get_by_email("admin@example.com")
    assert admin.role == "admin"
    assert admin.department == "IT"
    assert await store.categories.count() == len(DEFAULT_CATEGORIES)

    await svc.run("admin@example.com", "admin-password")
    assert len(store.users.users) == 1
    assert await store.categories.count() == len(DEFAULT_CATEGORIES)


async def test_skips_admin_without_password(store, hasher) -> None:
    svc = BootstrapService(store.users, store.categories, hasher)
    assert await svc.ensure_admin("admin@example.com", "") is False
    assert store.users.users == {}


async def test_existing_catalog_left_alone(store, hasher, category_service) -> None:
    await category_service.create_category("Custom")
    svc = BootstrapService(store.users, store.categories, hasher)
    assert await svc.ensure_default_categories() == 0
    assert [c.name for c in await store.categories.list_all()] == ["Custom"]


def test_default_categories_have_unique_subcategories() -> None:
    for category in DEFAULT_CATEGORIES:
        names = [s.name for s in category.subcategories]
        assert names and len(names) == len(set(names))
