"""Request context management using contextvars.

Async-safe storage for request-scoped data such as the authenticated user.
Set by the access guard dependency; read by logging and error handlers.

Usage:
    set_current_user(user_id="user123", role="admin")
    user_id = get_current_user_id()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_role: ContextVar[str | None] = ContextVar("current_role", default=None)


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of the current actor context."""

    user_id: str | None
    role: str | None


def set_current_user(user_id: str, role: str | None = None) -> None:
    """Set the current user context for this request.

    Raises:
        ValueError: If user_id is empty.
    """
    if not user_id:
        raise ValueError("user_id is required")
    _current_user_id.set(user_id)
    _current_role.set(role)


def get_current_user_id() -> str | None:
    return _current_user_id.get()


def get_actor_context() -> ActorContext:
    """Return a snapshot of the current actor (user id and role)."""
    return ActorContext(user_id=_current_user_id.get(), role=_current_role.get())


def clear_context() -> None:
    """Reset context to defaults (e.g. between tests or background jobs)."""
    _current_user_id.set(None)
    _current_role.set(None)
