"""Notification routes, always scoped to the authenticated user."""

from fastapi import APIRouter, Depends, status

from livestock_api.models.responses import MarkAllReadResponse, NotificationListResponse, NotificationResponse
from livestock_api.services import get_notification_store
from livestock_api.services.auth import get_current_identity
from livestock_common.models.notification import NotificationCreate
from livestock_common.models.user import AuthenticatedIdentity
from livestock_common.services.notification_store import NotificationStore

router = APIRouter(prefix="/notifications", tags=["notifications"], redirect_slashes=False)


@router.get("/me", response_model=NotificationListResponse)
async def my_notifications(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationListResponse:
    notifications = store.list_for_user(identity.user_id)
    return NotificationListResponse(message=f"{len(notifications)} notifications", notifications=notifications)


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationResponse:
    """Create a notification for the current user; the owner is never taken from the body."""
    notification = store.create(identity.user_id, payload.message, type=payload.type)
    return NotificationResponse(message="Notification created", notification=notification)


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
) -> MarkAllReadResponse:
    updated = store.mark_all_read(identity.user_id)
    return MarkAllReadResponse(message="All notifications marked read", updated=updated)
