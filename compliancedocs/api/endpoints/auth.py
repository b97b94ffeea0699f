"""Auth API: register, login, logout, current user, change password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from compliancedocs.api.dependencies import (
    CurrentIdentity,
    get_credential_service,
)
from compliancedocs.application.services.credential_service import CredentialService
from compliancedocs.core.limiter import limit_auth, limit_writes
from compliancedocs.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from compliancedocs.schemas.user import UserResponse, UserSummary

router = APIRouter()

CredentialSvc = Annotated[CredentialService, Depends(get_credential_service)]


@router.post("/register", response_model=TokenResponse, status_code=201)
@limit_auth
async def register(request: Request, body: RegisterRequest, credentials: CredentialSvc):
    """Create an account and return a token for it."""
    result = await credentials.register(
        email=body.email,
        name=body.name,
        password=body.password,
        department=body.department,
        role=body.role,
    )
    return TokenResponse(token=result.token, user=UserSummary.model_validate(result.user))


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(request: Request, body: LoginRequest, credentials: CredentialSvc):
    result = await credentials.login(body.email, body.password)
    return TokenResponse(token=result.token, user=UserSummary.model_validate(result.user))


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message=CredentialService.logout())


@router.get("/me", response_model=UserResponse)
async def get_me(identity: CurrentIdentity, credentials: CredentialSvc):
    user = await credentials.get_profile(identity.user_id)
    return UserResponse.model_validate(user)


@router.put("/change-password", response_model=MessageResponse)
@limit_writes
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    identity: CurrentIdentity,
    credentials: CredentialSvc,
):
    await credentials.change_password(
        identity.user_id, body.current_password, body.new_password
    )
    return MessageResponse(message="Password updated successfully")
