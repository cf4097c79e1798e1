"""Per-user notification models."""

from pydantic import Field

from livestock_common.models.base import CamelModel, Timestamp, new_id, utcnow

DEFAULT_NOTIFICATION_TYPE = "info"


class NotificationCreate(CamelModel):
    """Client payload for creating a notification for the current user."""

    type: str | None = Field(None, description="Free-text tag, defaults to 'info'")
    message: str = Field(..., min_length=1)


class Notification(CamelModel):
    """Persisted notification owned by one user."""

    id: str = Field(default_factory=new_id)
    user_id: str
    type: str = DEFAULT_NOTIFICATION_TYPE
    message: str
    read: bool = False
    created_at: Timestamp = Field(default_factory=utcnow)
