"""Password hashing and bearer token primitives."""

from livestock_common.security.passwords import PasswordHasher
from livestock_common.security.tokens import TokenService

__all__ = ["PasswordHasher", "TokenService"]
