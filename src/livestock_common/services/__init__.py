"""Common services package."""

from livestock_common.services.credential_service import AuthResult, CredentialService
from livestock_common.services.file_storage import FileStorage, LocalFileStorage
from livestock_common.services.listing_store import CosmosListingStore, InMemoryListingStore, ListingStore
from livestock_common.services.media_intake import IncomingFile, MediaIntake
from livestock_common.services.notification_store import (
    CosmosNotificationStore,
    InMemoryNotificationStore,
    NotificationStore,
)
from livestock_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

__all__ = [
    "AuthResult",
    "CosmosListingStore",
    "CosmosNotificationStore",
    "CosmosUserStore",
    "CredentialService",
    "FileStorage",
    "InMemoryListingStore",
    "InMemoryNotificationStore",
    "InMemoryUserStore",
    "IncomingFile",
    "ListingStore",
    "LocalFileStorage",
    "MediaIntake",
    "NotificationStore",
    "UserStore",
]
