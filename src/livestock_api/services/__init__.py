"""Service initialization and dependency injection.

Service instances are cached per application on ``app.state.services``.
When Cosmos DB is not configured, process-local in-memory stores are used.
A store that fails to initialize is not cached, so the next request retries.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from livestock_api.config import Settings
from livestock_common.exceptions import StorageUnavailableError
from livestock_common.security.passwords import PasswordHasher
from livestock_common.security.tokens import TokenService
from livestock_common.services.credential_service import CredentialService
from livestock_common.services.file_storage import FileStorage, LocalFileStorage
from livestock_common.services.listing_store import CosmosListingStore, InMemoryListingStore, ListingStore
from livestock_common.services.media_intake import MediaIntake
from livestock_common.services.notification_store import (
    CosmosNotificationStore,
    InMemoryNotificationStore,
    NotificationStore,
)
from livestock_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings


def _cached(request: Request, name: str, factory: Callable[[], Any]) -> Any:
    cache: dict[str, Any] = request.app.state.services
    lock: threading.Lock = request.app.state.services_lock
    # Getters run in the threadpool; build under the lock so each service is built once
    with lock:
        if name not in cache:
            cache[name] = factory()
            logger.info("Initialized %s (%s)", name, type(cache[name]).__name__)
        return cache[name]


def _store(request: Request, name: str, settings: Settings, cosmos_factory: Callable, memory_factory: Callable) -> Any:
    if not settings.cosmos_configured:
        return _cached(request, name, memory_factory)

    def build() -> Any:
        try:
            return cosmos_factory(config=settings.store_config())
        except Exception as e:
            logger.error("Failed to initialize %s: %s", name, e, exc_info=True)
            raise StorageUnavailableError() from e

    return _cached(request, name, build)


def get_user_store(request: Request, settings: Settings = Depends(get_app_settings)) -> UserStore:
    """Get the identity store."""
    return _store(request, "user_store", settings, CosmosUserStore, InMemoryUserStore)


def get_listing_store(request: Request, settings: Settings = Depends(get_app_settings)) -> ListingStore:
    """Get the listing store."""
    return _store(request, "listing_store", settings, CosmosListingStore, InMemoryListingStore)


def get_notification_store(request: Request, settings: Settings = Depends(get_app_settings)) -> NotificationStore:
    """Get the notification store."""
    return _store(request, "notification_store", settings, CosmosNotificationStore, InMemoryNotificationStore)


def get_token_service(request: Request, settings: Settings = Depends(get_app_settings)) -> TokenService:
    """Get the bearer token service."""
    return _cached(
        request,
        "token_service",
        lambda: TokenService(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm, ttl=settings.token_ttl),
    )


def get_credential_service(
    request: Request,
    user_store: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
) -> CredentialService:
    """Get the credential service."""
    return _cached(request, "credential_service", lambda: CredentialService(user_store, tokens, PasswordHasher()))


def get_file_storage(request: Request, settings: Settings = Depends(get_app_settings)) -> FileStorage:
    """Get the upload directory storage."""
    return _cached(request, "file_storage", lambda: LocalFileStorage(settings.upload_dir))


def get_media_intake(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: FileStorage = Depends(get_file_storage),
) -> MediaIntake:
    """Get the media intake service."""
    return _cached(
        request,
        "media_intake",
        lambda: MediaIntake(
            storage,
            max_files=settings.upload_max_files,
            max_file_size=settings.upload_max_file_size,
        ),
    )
