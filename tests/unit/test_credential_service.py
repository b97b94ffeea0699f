"""Tests for CredentialService and AccessGuard with in-memory repositories."""

import pytest

from compliancedocs.application.services import AccessGuard, CredentialService
from compliancedocs.domain.exceptions import (
    AccountDisabledException,
    DuplicateUserException,
    InvalidCredentialsException,
    InvalidTokenException,
    ResourceNotFoundException,
    UnauthenticatedException,
    ValidationException,
)
from compliancedocs.infrastructure.security import JWTTokenService


class TestRegister:
    async def test_register_returns_token_and_defaults(self, credential_service, token_service) -> None:
        result = await credential_service.register("Ana@Example.com", "Ana", "secret123")
        assert result.user.email == "ana@example.com"
        assert result.user.role == "employee"
        assert result.user.department == ""
        assert token_service.decode(result.token)["sub"] == result.user.id

    async def test_register_stores_hash_not_password(self, credential_service, store) -> None:
        result = await credential_service.register("a@example.com", "A", "secret123")
        assert store.users.hashes[result.user.id] != "secret123"

    async def test_duplicate_email(self, credential_service) -> None:
        await credential_service.register("a@example.com", "A", "secret123")
        with pytest.raises(DuplicateUserException):
            await credential_service.register("A@example.com", "B", "secret456")

    @pytest.mark.parametrize(
        ("email", "name", "password", "field"),
        [
            ("", "A", "secret123", "email"),
            ("not-an-email", "A", "secret123", "email"),
            ("a@example.com", " ", "secret123", "name"),
            ("a@example.com", "A", "", "password"),
        ],
    )
    async def test_invalid_input(self, credential_service, email, name, password, field) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await credential_service.register(email, name, password)
        assert exc_info.value.details["field"] == field

    async def test_role_honoured_when_allowed(self, credential_service) -> None:
        result = await credential_service.register("it@example.com", "IT", "secret123", role="it_responsible")
        assert result.user.role == "it_responsible"

    async def test_unknown_role_rejected(self, credential_service) -> None:
        with pytest.raises(ValidationException):
            await credential_service.register("x@example.com", "X", "secret123", role="root")

    async def test_role_ignored_when_disabled(self, store, hasher, token_service) -> None:
        svc = CredentialService(store.users, hasher, token_service, allow_role_on_register=False)
        result = await svc.register("x@example.com", "X", "secret123", role="admin")
        assert result.user.role == "employee"


class TestLogin:
    async def test_success_records_last_login(self, credential_service, store) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        result = await credential_service.login("a@example.com", "secret123")
        assert result.user.id == created.user.id
        assert store.users.users[created.user.id].last_login is not None

    async def test_unknown_email_and_wrong_password_look_identical(
        self, credential_service, hasher
    ) -> None:
        await credential_service.register("a@example.com", "A", "secret123")
        with pytest.raises(InvalidCredentialsException) as unknown:
            await credential_service.login("nobody@example.com", "secret123")
        with pytest.raises(InvalidCredentialsException) as wrong:
            await credential_service.login("a@example.com", "wrong-password")
        assert unknown.value.message == wrong.value.message
        assert hasher.dummy_calls == 1

    async def test_deactivated_account_gets_distinct_message(self, credential_service, store) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        await store.users.set_active(created.user.id, False)
        with pytest.raises(InvalidCredentialsException) as exc_info:
            await credential_service.login("a@example.com", "secret123")
        assert exc_info.value.message == InvalidCredentialsException.DEACTIVATED

    async def test_deactivated_account_with_wrong_password_is_generic(
        self, credential_service, store
    ) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        await store.users.set_active(created.user.id, False)
        with pytest.raises(InvalidCredentialsException) as exc_info:
            await credential_service.login("a@example.com", "nope-nope")
        assert exc_info.value.message == InvalidCredentialsException.INVALID


class TestChangePassword:
    async def test_change_password_rotates_hash(self, credential_service) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        await credential_service.change_password(created.user.id, "secret123", "newsecret")
        await credential_service.login("a@example.com", "newsecret")
        with pytest.raises(InvalidCredentialsException):
            await credential_service.login("a@example.com", "secret123")

    async def test_wrong_current_password(self, credential_service) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        with pytest.raises(InvalidCredentialsException, match="Current password is incorrect"):
            await credential_service.change_password(created.user.id, "bad", "newsecret")

    async def test_missing_user(self, credential_service) -> None:
        with pytest.raises(ResourceNotFoundException):
            await credential_service.change_password("missing", "secret123", "newsecret")

    async def test_profile_and_logout(self, credential_service) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        profile = await credential_service.get_profile(created.user.id)
        assert profile.email == "a@example.com"
        assert CredentialService.logout() == "Logged out successfully"


class TestAccessGuard:
    @pytest.fixture
    def guard(self, store, token_service) -> AccessGuard:
        return AccessGuard(token_service, store.users)

    async def test_missing_token(self, guard) -> None:
        with pytest.raises(UnauthenticatedException):
            await guard.authenticate(None)

    async def test_invalid_token(self, guard) -> None:
        with pytest.raises(InvalidTokenException):
            await guard.authenticate("garbage")

    async def test_token_signed_with_other_secret(self, guard) -> None:
        token = JWTTokenService(secret_key="another-secret").issue("u1", "admin")
        with pytest.raises(InvalidTokenException):
            await guard.authenticate(token)

    async def test_user_gone(self, guard, token_service) -> None:
        with pytest.raises(UnauthenticatedException, match="no longer exists"):
            await guard.authenticate(token_service.issue("ghost", "admin"))

    async def test_disabled_user(self, guard, credential_service, store) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        await store.users.set_active(created.user.id, False)
        with pytest.raises(AccountDisabledException):
            await guard.authenticate(created.token)

    async def test_role_comes_from_store(self, guard, credential_service, store, token_service) -> None:
        created = await credential_service.register("a@example.com", "A", "secret123")
        token = token_service.issue(created.user.id, "admin")
        identity = await guard.authenticate(token)
        assert identity.user_id == created.user.id
        assert identity.role == "employee"
