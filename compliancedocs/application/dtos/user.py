"""DTOs for user and authentication use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserResult:
    """User read-model (never carries the password hash)."""

    id: str
    email: str
    name: str
    role: str
    department: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserCredentials:
    """User plus password hash; only the credential service consumes this."""

    user: UserResult
    hashed_password: str


@dataclass(frozen=True)
class UserCreate:
    """Input for creating a user record (hash already computed)."""

    email: str
    name: str
    hashed_password: str
    role: str
    department: str = ""


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Result of the access guard: who is calling and with which role."""

    user_id: str
    role: str


@dataclass(frozen=True)
class AuthResult:
    """Token plus public user fields returned by register and login."""

    token: str
    user: UserResult
