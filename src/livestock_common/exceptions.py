"""Exception taxonomy for the marketplace.

Every error carries the HTTP status it maps to and a human-readable message
that is safe to return to clients. Identity failures use deliberately generic
messages so a caller cannot tell which check failed.
"""

from typing import Any


class MarketplaceError(Exception):
    """Base exception for all marketplace errors.

    Attributes:
        message: A human-readable error message
        status_code: HTTP status code the error maps to
        code: An error code for machine processing
        detail: Additional information about the error
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, detail: dict[str, Any] | list[Any] | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    """A required field is missing or malformed."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Missing or invalid fields"


class ConflictError(MarketplaceError):
    """A unique key is already taken."""

    status_code = 400
    code = "CONFLICT"
    default_message = "Email already registered"


class InvalidCredentialsError(MarketplaceError):
    """Unknown email or wrong password."""

    status_code = 400
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class UnauthenticatedError(MarketplaceError):
    """Bearer header missing or malformed."""

    status_code = 401
    code = "UNAUTHENTICATED"
    default_message = "No token"


class InvalidTokenError(MarketplaceError):
    """Token signature or expiry check failed."""

    status_code = 401
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class UnknownUserError(MarketplaceError):
    """Token subject no longer resolves to a user."""

    status_code = 401
    code = "UNKNOWN_USER"
    default_message = "User not found"


class ForbiddenError(MarketplaceError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Not allowed"


class NotFoundError(MarketplaceError):
    """Referenced entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class PayloadTooLargeError(MarketplaceError):
    """Upload exceeds the file count or file size limit."""

    status_code = 413
    code = "PAYLOAD_TOO_LARGE"
    default_message = "Upload too large"


class UnsupportedMediaTypeError(MarketplaceError):
    """Upload declares a MIME type other than image/* or video/*."""

    status_code = 400
    code = "UNSUPPORTED_MEDIA_TYPE"
    default_message = "Only image and video files are allowed"


class InternalError(MarketplaceError):
    """Unexpected storage or infrastructure failure."""


class StorageUnavailableError(InternalError):
    """The document store could not be reached or initialized."""

    code = "STORAGE_UNAVAILABLE"
    default_message = "Storage unavailable"
