"""Notification store scoped by owning user."""

import logging
import threading
from abc import ABC, abstractmethod

from livestock_common.config.store_config import StoreConfig
from livestock_common.exceptions import ValidationError
from livestock_common.infra.cosmos.cosmos_base import BaseCosmosClient
from livestock_common.models.notification import DEFAULT_NOTIFICATION_TYPE, Notification

logger = logging.getLogger(__name__)


class NotificationStore(ABC):
    """Abstract interface for the notification store.

    Callers pass the user id of the authenticated identity, never a value
    taken from the request body.
    """

    def create(self, user_id: str, message: str, type: str | None = None) -> Notification:
        """Create a notification for a user.

        Raises:
            ValidationError: If the message is empty
        """
        if not message or not message.strip():
            raise ValidationError("Message is required")
        notification = Notification(
            user_id=user_id,
            type=(type or "").strip() or DEFAULT_NOTIFICATION_TYPE,
            message=message.strip(),
        )
        return self._insert(notification)

    @abstractmethod
    def _insert(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Notification]:
        """List a user's notifications, newest first."""
        pass

    @abstractmethod
    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of notifications changed; 0 when called again
        """
        pass


class InMemoryNotificationStore(NotificationStore):
    """Process-local notification store for development and tests."""

    def __init__(self) -> None:
        self._notifications: list[Notification] = []
        self._lock = threading.Lock()

    def _insert(self, notification: Notification) -> Notification:
        with self._lock:
            self._notifications.append(notification)
        return notification

    def list_for_user(self, user_id: str) -> list[Notification]:
        with self._lock:
            owned = [n for n in reversed(self._notifications) if n.user_id == user_id]
        return sorted(owned, key=lambda n: n.created_at, reverse=True)

    def mark_all_read(self, user_id: str) -> int:
        changed = 0
        with self._lock:
            for index, notification in enumerate(self._notifications):
                if notification.user_id == user_id and not notification.read:
                    self._notifications[index] = notification.model_copy(update={"read": True})
                    changed += 1
        return changed


class CosmosNotificationStore(NotificationStore):
    """Cosmos DB implementation of NotificationStore, partitioned by user id."""

    def __init__(
        self, config: StoreConfig | None = None, client: BaseCosmosClient[Notification] | None = None
    ) -> None:
        """Initialize Cosmos DB notification store.

        Args:
            config: Store configuration. If None, will load from environment.
            client: Pre-built Cosmos client. If None, creates a new one.
        """
        if client is None:
            if config is None:
                from livestock_common.config.store_config import get_store_config

                config = get_store_config()
            client = BaseCosmosClient[Notification](
                container_name=config.notifications_container,
                partition_key_path="/userId",
                config=config,
            )
        self.client = client

    def _insert(self, notification: Notification) -> Notification:
        created = self.client.create_item(item=notification)
        logger.info("Created notification %s for user %s", notification.id, notification.user_id)
        return Notification.model_validate(created)

    def list_for_user(self, user_id: str) -> list[Notification]:
        items = self.client.query_items(
            query="SELECT * FROM c WHERE c.userId = @userId ORDER BY c.createdAt DESC",
            parameters=[{"name": "@userId", "value": user_id}],
            partition_key=user_id,
        )
        return [Notification.model_validate(item) for item in items]

    def mark_all_read(self, user_id: str) -> int:
        unread = self.client.query_items(
            query="SELECT * FROM c WHERE c.userId = @userId AND c.read = false",
            parameters=[{"name": "@userId", "value": user_id}],
            partition_key=user_id,
        )
        for item in unread:
            self.client.update_item(item_id=item["id"], partition_key=user_id, updates={"read": True})
        if unread:
            logger.info("Marked %d notifications read for user %s", len(unread), user_id)
        return len(unread)
