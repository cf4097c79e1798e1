"""Response envelopes. Every response carries ``ok`` and ``message``."""

from pydantic import BaseModel

from livestock_common.models.listing import Listing
from livestock_common.models.notification import Notification
from livestock_common.models.upload import UploadedFile
from livestock_common.models.user import PublicUser


class ApiResponse(BaseModel):
    """Base envelope; also the body of every error response."""

    ok: bool = True
    message: str = ""


class AuthResponse(ApiResponse):
    token: str
    user: PublicUser


class UserResponse(ApiResponse):
    user: PublicUser


class AnimalListResponse(ApiResponse):
    animals: list[Listing]


class AnimalResponse(ApiResponse):
    animal: Listing


class NotificationListResponse(ApiResponse):
    notifications: list[Notification]


class NotificationResponse(ApiResponse):
    notification: Notification


class MarkAllReadResponse(ApiResponse):
    updated: int


class UploadResponse(ApiResponse):
    files: list[UploadedFile]
