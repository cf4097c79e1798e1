"""Common models package."""

from livestock_common.models.listing import Listing, ListingCreate
from livestock_common.models.notification import Notification, NotificationCreate
from livestock_common.models.upload import UploadedFile
from livestock_common.models.user import (
    AuthenticatedIdentity,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    User,
)

__all__ = [
    "AuthenticatedIdentity",
    "Listing",
    "ListingCreate",
    "LoginRequest",
    "Notification",
    "NotificationCreate",
    "PublicUser",
    "RegisterRequest",
    "UploadedFile",
    "User",
]
