"""Security: JWT tokens and bcrypt password hashing."""

from compliancedocs.infrastructure.security.jwt import JWTTokenService
from compliancedocs.infrastructure.security.password import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher", "JWTTokenService"]
