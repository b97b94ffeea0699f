"""Domain enumerations: user roles, document status, auth provider."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Closed set of roles. Category mutation is limited to ADMIN and IT_RESPONSIBLE."""

    ADMIN = "admin"
    IT_RESPONSIBLE = "it_responsible"
    EMPLOYEE = "employee"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Document lifecycle status. DELETED is a soft delete; blobs are retained."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DELETED = "deleted"


class AuthProvider(_ValuesMixin, str, Enum):
    LOCAL = "local"
