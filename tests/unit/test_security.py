"""Tests for JWT token service and bcrypt password hashing."""

from datetime import timedelta

import pytest

from compliancedocs.infrastructure.security import BcryptPasswordHasher, JWTTokenService
from compliancedocs.infrastructure.security.jwt import create_access_token, verify_token
from compliancedocs.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)


class TestJWTTokenService:
    def test_issue_and_decode_round_trip_claims(self) -> None:
        svc = JWTTokenService(secret_key="s3cret", expire_minutes=5)
        claims = svc.decode(svc.issue("user-1", "admin"))
        assert claims["sub"] == "user-1"
        assert claims["role"] == "admin"
        assert claims["exp"] > claims["iat"]

    def test_forged_token_rejected(self) -> None:
        token = JWTTokenService(secret_key="other").issue("user-1", "admin")
        with pytest.raises(ValueError, match="Invalid token"):
            JWTTokenService(secret_key="s3cret").decode(token)

    def test_expired_token_rejected_like_forged(self) -> None:
        token = create_access_token(
            {"sub": "user-1"},
            secret_key="s3cret",
            algorithm="HS256",
            expires_delta=timedelta(seconds=-10),
        )
        with pytest.raises(ValueError, match="Invalid token"):
            verify_token(token, secret_key="s3cret", algorithm="HS256")

    def test_token_without_sub_rejected(self) -> None:
        token = create_access_token(
            {"role": "admin"},
            secret_key="s3cret",
            algorithm="HS256",
            expires_delta=timedelta(minutes=1),
        )
        with pytest.raises(ValueError):
            verify_token(token, secret_key="s3cret", algorithm="HS256")

    def test_empty_secret_refused(self) -> None:
        with pytest.raises(ValueError):
            JWTTokenService(secret_key="")


class TestPasswordHashing:
    def test_hash_verifies_and_is_salted(self) -> None:
        first = get_password_hash("correct horse")
        second = get_password_hash("correct horse")
        assert first != second
        assert verify_password("correct horse", first)
        assert not verify_password("wrong horse", first)

    def test_long_passwords_are_not_truncated(self) -> None:
        base = "x" * 80
        hashed = get_password_hash(base + "a")
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash_returns_false(self) -> None:
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    async def test_async_hasher(self) -> None:
        hasher = BcryptPasswordHasher()
        hashed = await hasher.hash("pw123456")
        assert await hasher.verify("pw123456", hashed)
        assert not await hasher.verify("nope", hashed)
        await hasher.verify_dummy("whatever")
