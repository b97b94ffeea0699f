"""Auth dependency unit tests with a mocked access guard."""

from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from compliancedocs.api.dependencies.auth import (
    extract_token,
    get_current_identity,
    require_permission,
)
from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.application.services import AuthorizationService
from compliancedocs.domain.exceptions import (
    AuthorizationException,
    InvalidTokenException,
)
from compliancedocs.shared.context import get_actor_context


def _request(headers: dict[str, str]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/auth/me",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        }
    )


def test_extract_token_prefers_configured_header() -> None:
    request = _request({"x-auth-token": " abc ", "Authorization": "Bearer other"})
    assert extract_token(request) == "abc"


def test_extract_token_bearer_fallback() -> None:
    assert extract_token(_request({"Authorization": "Bearer xyz"})) == "xyz"
    assert extract_token(_request({"Authorization": "Basic xyz"})) is None
    assert extract_token(_request({})) is None


async def test_current_identity_sets_state_and_context() -> None:
    guard = AsyncMock()
    guard.authenticate = AsyncMock(
        return_value=AuthenticatedIdentity(user_id="usr-1", role="admin")
    )
    request = _request({"x-auth-token": "tok"})

    identity = await get_current_identity(request, guard)

    guard.authenticate.assert_awaited_once_with("tok")
    assert request.state.identity == identity
    context = get_actor_context()
    assert (context.user_id, context.role) == ("usr-1", "admin")


async def test_current_identity_propagates_guard_errors() -> None:
    guard = AsyncMock()
    guard.authenticate = AsyncMock(side_effect=InvalidTokenException())
    with pytest.raises(InvalidTokenException):
        await get_current_identity(_request({"x-auth-token": "bad"}), guard)
    assert get_actor_context().user_id is None


async def test_require_permission_checks_role() -> None:
    check = require_permission("category", "create")
    admin = AuthenticatedIdentity(user_id="usr-1", role="admin")
    employee = AuthenticatedIdentity(user_id="usr-2", role="employee")

    assert await check(admin, AuthorizationService()) == admin
    with pytest.raises(AuthorizationException):
        await check(employee, AuthorizationService())
