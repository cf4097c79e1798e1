"""Bearer token issuance and validation with python-jose.

Tokens are stateless HS256 JWTs. There is no denylist: a token stays valid
until its expiry even if the user changes afterwards.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from livestock_common.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=7)


class TokenService:
    """Issues and validates signed bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, email: str, expires_delta: timedelta | None = None) -> str:
        """Create a token for a user.

        Args:
            user_id: Subject of the token
            email: Informational claim
            expires_delta: Lifetime override; defaults to the configured TTL

        Returns:
            Encoded JWT
        """
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + (expires_delta if expires_delta is not None else self.ttl)).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Verify signature and expiry and return the claims.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            logger.debug("Rejected expired token")
            raise InvalidTokenError() from e
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            raise InvalidTokenError() from e

        if not claims.get("sub"):
            raise InvalidTokenError()
        return claims

    def subject(self, token: str) -> str:
        """Return the user id carried by a valid token."""
        return str(self.decode(token)["sub"])
