"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from compliancedocs.schemas.user import UserSummary


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    department: str | None = Field(default=None, max_length=255)
    role: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued token plus the public user fields."""

    token: str
    user: UserSummary


class MessageResponse(BaseModel):
    message: str
