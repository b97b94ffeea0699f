"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated. The
async helpers run bcrypt in a worker thread so the event loop stays free.
"""

import asyncio
import base64
import hashlib

import bcrypt

_DUMMY_PASSWORD = "not-a-real-password"
_dummy_hash_cache: str | None = None


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


class BcryptPasswordHasher:
    """Async facade over bcrypt used by the credential service."""

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(get_password_hash, password)

    async def verify(self, password: str, hashed_password: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed_password)

    async def verify_dummy(self, password: str) -> None:
        """Spend one bcrypt comparison for an unknown account (timing-attack mitigation)."""
        global _dummy_hash_cache
        if _dummy_hash_cache is None:
            _dummy_hash_cache = await asyncio.to_thread(
                get_password_hash, _DUMMY_PASSWORD
            )
        await asyncio.to_thread(verify_password, password, _dummy_hash_cache)
