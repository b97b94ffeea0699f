"""Authorization policy: one table mapping resource:action codes to allowed roles."""

from __future__ import annotations

from collections.abc import Mapping

from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.domain.enums import UserRole
from compliancedocs.domain.exceptions import AuthorizationException

CATALOG_EDITORS: frozenset[str] = frozenset(
    {UserRole.ADMIN.value, UserRole.IT_RESPONSIBLE.value}
)

# None means "any authenticated user". Codes missing from the table are denied.
DEFAULT_POLICY: dict[str, frozenset[str] | None] = {
    "category:read": None,
    "category:create": CATALOG_EDITORS,
    "category:update": CATALOG_EDITORS,
    "category:delete": CATALOG_EDITORS,
    "subcategory:create": CATALOG_EDITORS,
    "subcategory:update": CATALOG_EDITORS,
    "subcategory:delete": CATALOG_EDITORS,
    "document:read": None,
    "document:create": None,
    "document:update": None,
    "document:delete": None,
    "revision:read": None,
    "revision:create": None,
}


class AuthorizationService:
    """Centralized role check against the policy table."""

    def __init__(
        self, policy: Mapping[str, frozenset[str] | None] | None = None
    ) -> None:
        self.policy = dict(DEFAULT_POLICY if policy is None else policy)

    def check_permission(self, role: str, resource: str, action: str) -> bool:
        """Return True if role may perform resource:action."""
        code = f"{resource}:{action}"
        if code not in self.policy:
            return False
        allowed = self.policy[code]
        return allowed is None or role in allowed

    def require_permission(
        self, identity: AuthenticatedIdentity, resource: str, action: str
    ) -> None:
        """Raise AuthorizationException if the caller's role lacks resource:action."""
        if not self.check_permission(identity.role, resource, action):
            raise AuthorizationException(resource=resource, action=action)
