"""JWT token creation and verification for authentication.

Secret, algorithm and lifetime are passed in by the composition root;
this module never reads settings.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt


def create_access_token(
    data: dict[str, Any],
    *,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
) -> str:
    """Create a JWT access token with the given claims plus iat and exp.

    Args:
        data: Claims to encode (e.g. sub, role).
        secret_key: HMAC signing secret.
        algorithm: JOSE algorithm name (e.g. HS256).
        expires_delta: Token lifetime.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    to_encode = data.copy()
    to_encode["iat"] = now
    to_encode["exp"] = now + expires_delta
    encoded = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return cast(str, encoded)


def verify_token(token: str, *, secret_key: str, algorithm: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub. Expired and forged tokens raise the
    same ValueError type.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


class JWTTokenService:
    """Issues and validates access tokens carrying user id (sub) and role."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    def issue(self, user_id: str, role: str) -> str:
        return create_access_token(
            {"sub": user_id, "role": role},
            secret_key=self._secret_key,
            algorithm=self._algorithm,
            expires_delta=self._lifetime,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """Return the verified payload; raises ValueError on any failure."""
        return verify_token(
            token, secret_key=self._secret_key, algorithm=self._algorithm
        )
