"""User models for registration, login and authenticated requests."""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import ConfigDict, Field, StringConstraints, field_validator

from livestock_common.models.base import CamelModel, Timestamp, new_id, utcnow

# Passwords are compared byte for byte, so surrounding whitespace is kept
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1)]


class User(CamelModel):
    """Stored user record, including the password hash."""

    id: str = Field(default_factory=new_id, description="Unique identifier for the user")
    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address, unique as stored")
    phone: str = Field(..., description="Contact phone number")
    password_hash: str = Field(..., description="bcrypt hash of the password")
    created_at: Timestamp = Field(default_factory=utcnow)


class PublicUser(CamelModel):
    """User fields that are safe to return to clients."""

    id: str
    name: str
    email: str
    phone: str

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, name=user.name, email=user.email, phone=user.phone)


class RegisterRequest(CamelModel):
    """Registration payload."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    password: Password

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Asha",
                "email": "asha@example.com",
                "phone": "555-0100",
                "password": "s3cret",
            }
        }
    )

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        """Reject malformed addresses but keep the address exactly as sent.

        Logins look the email up as stored, so no normalization is applied here.
        """
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e
        return value


class LoginRequest(CamelModel):
    """Login payload.

    The email is not format-checked so that a malformed address fails the same
    way as an unknown one.
    """

    email: str = Field(..., min_length=1)
    password: Password


class AuthenticatedIdentity(CamelModel):
    """Immutable identity handed to handlers after the authentication gate."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    email: str
    phone: str

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedIdentity":
        return cls(user_id=user.id, name=user.name, email=user.email, phone=user.phone)

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.user_id, name=self.name, email=self.email, phone=self.phone)
