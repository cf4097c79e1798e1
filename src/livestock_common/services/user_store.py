"""Identity store: user records with unique emails."""

import logging
import threading
from abc import ABC, abstractmethod

from livestock_common.config.store_config import StoreConfig
from livestock_common.exceptions import ConflictError
from livestock_common.infra.cosmos.cosmos_base import BaseCosmosClient
from livestock_common.models.user import User

logger = logging.getLogger(__name__)


class UserStore(ABC):
    """Abstract interface for the identity store."""

    @abstractmethod
    def add_user(self, user: User) -> User:
        """Persist a new user.

        Raises:
            ConflictError: If a user with the same email already exists
        """
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Get a user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email, compared exactly as stored."""
        pass


class InMemoryUserStore(UserStore):
    """Process-local user store for development and tests."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def add_user(self, user: User) -> User:
        with self._lock:
            if any(existing.email == user.email for existing in self._users.values()):
                raise ConflictError()
            self._users[user.id] = user
        return user

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> User | None:
        for user in list(self._users.values()):
            if user.email == email:
                return user
        return None


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore.

    Users are partitioned by id. Email uniqueness is checked with a
    cross-partition query before insert.
    """

    def __init__(self, config: StoreConfig | None = None, client: BaseCosmosClient[User] | None = None) -> None:
        """Initialize Cosmos DB user store.

        Args:
            config: Store configuration. If None, will load from environment.
            client: Pre-built Cosmos client. If None, creates a new one.
        """
        if client is None:
            if config is None:
                from livestock_common.config.store_config import get_store_config

                config = get_store_config()
            client = BaseCosmosClient[User](
                container_name=config.users_container,
                partition_key_path="/id",
                config=config,
            )
        self.client = client

    def add_user(self, user: User) -> User:
        if self.get_user_by_email(user.email) is not None:
            raise ConflictError()
        created = self.client.create_item(item=user)
        logger.info("Registered user %s", user.id)
        return User.model_validate(created)

    def get_user(self, user_id: str) -> User | None:
        item = self.client.read_item(item_id=user_id, partition_key=user_id)
        if item is None:
            return None
        return User.model_validate(item)

    def get_user_by_email(self, email: str) -> User | None:
        items = self.client.query_items(
            query="SELECT * FROM c WHERE c.email = @email",
            parameters=[{"name": "@email", "value": email}],
        )
        if not items:
            return None
        return User.model_validate(items[0])
