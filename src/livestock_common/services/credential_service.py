"""Credential service: registration, login and bearer token authentication."""

import logging

from pydantic import BaseModel

from livestock_common.exceptions import (
    InvalidCredentialsError,
    UnauthenticatedError,
    UnknownUserError,
)
from livestock_common.models.user import AuthenticatedIdentity, LoginRequest, PublicUser, RegisterRequest, User
from livestock_common.security.passwords import PasswordHasher
from livestock_common.security.tokens import TokenService
from livestock_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


class AuthResult(BaseModel):
    """Token plus the public fields of the user it was issued for."""

    token: str
    user: PublicUser


class CredentialService:
    """Registers users, checks passwords and resolves bearer tokens to identities."""

    def __init__(self, user_store: UserStore, tokens: TokenService, hasher: PasswordHasher | None = None) -> None:
        self.user_store = user_store
        self.tokens = tokens
        self.hasher = hasher or PasswordHasher()

    def _result(self, user: User) -> AuthResult:
        return AuthResult(token=self.tokens.issue(user.id, user.email), user=PublicUser.from_user(user))

    def register(self, request: RegisterRequest) -> AuthResult:
        """Create a user and sign them in.

        Raises:
            ConflictError: If the email is already registered
        """
        user = User(
            name=request.name,
            email=request.email,
            phone=request.phone,
            password_hash=self.hasher.hash(request.password),
        )
        created = self.user_store.add_user(user)
        logger.info("User %s registered", created.id)
        return self._result(created)

    def login(self, request: LoginRequest) -> AuthResult:
        """Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password alike
        """
        user = self.user_store.get_user_by_email(request.email)
        if user is None or not self.hasher.verify(request.password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()
        return self._result(user)

    def authenticate(self, token: str | None) -> AuthenticatedIdentity:
        """Resolve a bearer token to the identity of an existing user.

        Raises:
            UnauthenticatedError: If no token was supplied
            InvalidTokenError: If the token fails signature or expiry checks
            UnknownUserError: If the token's user no longer exists
        """
        if not token:
            raise UnauthenticatedError()
        user_id = self.tokens.subject(token)
        user = self.user_store.get_user(user_id)
        if user is None:
            logger.warning("Token subject %s does not resolve to a user", user_id)
            raise UnknownUserError()
        return AuthenticatedIdentity.from_user(user)
