"""Password hashing and verification using passlib with bcrypt."""

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10


class PasswordHasher:
    """Salted, slow password hashing."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str | None, password_hash: str | None) -> bool:
        """Verify a plaintext password against a stored hash.

        Returns False for missing values or an unparseable hash.
        """
        if not password or not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False
