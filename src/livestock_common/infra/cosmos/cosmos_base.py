"""Generic base class for Cosmos DB client operations."""

import logging
from datetime import datetime
from typing import Any

from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

from livestock_common.config.store_config import StoreConfig

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


def strip_system_fields(item: dict) -> dict:
    """Remove Cosmos DB bookkeeping fields from a returned item."""
    return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}


class BaseCosmosClient[T: BaseModel]:
    """Infrastructure layer: Generic base class for Cosmos DB client operations."""

    @staticmethod
    def _serialize_datetimes(obj: Any) -> Any:
        """Recursively serialize datetime objects to ISO format strings."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, dict):
            return {k: BaseCosmosClient._serialize_datetimes(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [BaseCosmosClient._serialize_datetimes(item) for item in obj]
        else:
            return obj

    def __init__(
        self,
        container_name: str,
        partition_key_path: str = "/id",
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize Cosmos DB client.

        Args:
            container_name: Container name
            partition_key_path: Partition key path (default: "/id")
            config: Store configuration. If None, will load from environment.
        """
        if config is None:
            from livestock_common.config.store_config import get_store_config

            config = get_store_config()

        self.config = config
        self.container_name = container_name
        self.partition_key_path = partition_key_path

        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        if config.azure_cosmosdb_key:
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
        else:
            # Managed identity
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=DefaultAzureCredential())

        self.database = self.client.get_database_client(config.database_name)
        self._ensure_container_exists(container_name, partition_key_path)
        self.container = self.database.get_container_client(container_name)

    def _ensure_container_exists(self, container_name: str, partition_key_path: str) -> None:
        """Create the container if it does not exist yet.

        Args:
            container_name: Container name
            partition_key_path: Partition key path
        """
        try:
            self.database.get_container_client(container_name).read()
            logger.debug("Container '%s' already exists", container_name)
            return
        except CosmosResourceNotFoundError:
            pass

        pk = PartitionKey(path=partition_key_path)
        try:
            if self.config.is_emulator:
                # Emulator requires provisioned throughput
                self.database.create_container(id=container_name, partition_key=pk, offer_throughput=400)
            else:
                self.database.create_container(id=container_name, partition_key=pk)
            logger.info("Created container '%s' with partition key '%s'", container_name, partition_key_path)
        except CosmosResourceExistsError:
            logger.debug("Container '%s' was created concurrently", container_name)

    def create_item(self, item: T) -> dict:
        """Create an item in Cosmos DB.

        Args:
            item: Pydantic model instance to create

        Returns:
            Created item as dictionary (with Cosmos system fields removed)
        """
        try:
            item_dict = item.model_dump(mode="json", by_alias=True)
            created = self.container.create_item(body=item_dict)
            logger.info("Created item %s in container %s", created["id"], self.container_name)
            return strip_system_fields(created)
        except CosmosResourceExistsError:
            logger.error("Item already exists in %s", self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to create item in %s: %s", self.container_name, e)
            raise

    def read_item(self, item_id: str, partition_key: str) -> dict | None:
        """Read an item from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value

        Returns:
            Item as dictionary (with Cosmos system fields removed), or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=partition_key)
            logger.debug("Read item %s from container %s", item_id, self.container_name)
            return strip_system_fields(item)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        except Exception as e:
            logger.error("Failed to read item %s from %s: %s", item_id, self.container_name, e)
            raise

    def update_item(self, item_id: str, partition_key: str, updates: dict) -> dict:
        """Update an item in Cosmos DB (partial update).

        Args:
            item_id: Item ID
            partition_key: Partition key value
            updates: Dictionary of fields to update

        Returns:
            Updated item as dictionary (with Cosmos system fields removed)
        """
        try:
            existing = self.container.read_item(item=item_id, partition_key=partition_key)
            existing.update(self._serialize_datetimes(updates))
            updated = self.container.replace_item(item=item_id, body=existing)
            logger.debug("Updated item %s in container %s", item_id, self.container_name)
            return strip_system_fields(updated)
        except CosmosResourceNotFoundError:
            logger.error("Item %s not found for update in %s", item_id, self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to update item %s in %s: %s", item_id, self.container_name, e)
            raise

    def query_items(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
        partition_key: str | None = None,
    ) -> list[dict]:
        """Query items from Cosmos DB.

        Args:
            query: SQL query string
            parameters: Query parameters, e.g. [{"name": "@email", "value": "a@x.com"}]
            partition_key: Restrict the query to one partition; cross-partition otherwise

        Returns:
            List of items as dictionaries (with Cosmos system fields removed)
        """
        try:
            if partition_key:
                items = self.container.query_items(
                    query=query, parameters=parameters, partition_key=partition_key
                )
            else:
                items = self.container.query_items(
                    query=query, parameters=parameters, enable_cross_partition_query=True
                )
            results = [strip_system_fields(item) for item in items]
            logger.debug("Queried %d items from container %s", len(results), self.container_name)
            return results
        except Exception as e:
            logger.error("Failed to query items from %s: %s", self.container_name, e)
            raise

    def delete_item(self, item_id: str, partition_key: str) -> bool:
        """Delete an item from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
            logger.info("Deleted item %s from container %s", item_id, self.container_name)
            return True
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        except Exception as e:
            logger.error("Failed to delete item %s from %s: %s", item_id, self.container_name, e)
            raise
