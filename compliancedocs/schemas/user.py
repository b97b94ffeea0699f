"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """User fields returned with a token."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: str


class UserResponse(UserSummary):
    """Current user profile (no password hash)."""

    department: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None
