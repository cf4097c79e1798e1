"""Cosmos DB initialization service."""

import logging

from azure.cosmos import CosmosClient, PartitionKey, exceptions
from azure.identity import DefaultAzureCredential

from livestock_api.config import Settings

logger = logging.getLogger(__name__)

# container setting name -> partition key path
CONTAINERS = {
    "users_container": "/id",
    "listings_container": "/id",
    "notifications_container": "/userId",
}


class CosmosDbInitializer:
    """Initialize Cosmos DB database and containers if they don't exist."""

    def __init__(self, settings: Settings):
        """Initialize the Cosmos DB client.

        Args:
            settings: Application settings with Cosmos DB configuration
        """
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database = None

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        credential = self.settings.azure_cosmosdb_key or DefaultAzureCredential()
        self.client = CosmosClient(url=self.settings.azure_cosmosdb_endpoint, credential=credential)
        logger.info("Connected to Cosmos DB at %s", self.settings.azure_cosmosdb_endpoint)

    def initialize_database(self) -> None:
        """Create database if it doesn't exist."""
        if not self.client:
            return
        self.database = self.client.create_database_if_not_exists(id=self.settings.database_name)
        logger.info("Database '%s' initialized", self.settings.database_name)

    def initialize_containers(self) -> None:
        """Create containers if they don't exist."""
        if not self.database:
            return

        is_emulator = self.settings.store_config().is_emulator

        for setting_name, partition_key_path in CONTAINERS.items():
            container_name = getattr(self.settings, setting_name)
            pk = PartitionKey(path=partition_key_path)
            try:
                if is_emulator:
                    # Emulator requires provisioned throughput
                    self.database.create_container_if_not_exists(
                        id=container_name, partition_key=pk, offer_throughput=400
                    )
                else:
                    self.database.create_container_if_not_exists(id=container_name, partition_key=pk)
                logger.info("Container '%s' initialized with partition key '%s'", container_name, partition_key_path)
            except exceptions.CosmosResourceExistsError:
                logger.info("Container '%s' already exists", container_name)

    def initialize(self) -> None:
        """Run full initialization: connect, create database and containers."""
        self.connect()
        self.initialize_database()
        self.initialize_containers()
        logger.info("Cosmos DB initialization completed successfully")


async def initialize_cosmos_db(settings: Settings) -> bool:
    """Initialize Cosmos DB during application startup.

    Failures are logged and never raised: the API starts anyway and requests
    that need the store fail individually until it becomes reachable.

    Args:
        settings: Application settings

    Returns:
        True if initialization completed
    """
    if not settings.cosmos_configured:
        logger.warning("Cosmos DB endpoint not configured; using in-memory stores")
        return False

    initializer = CosmosDbInitializer(settings)
    try:
        initializer.initialize()
        return True
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e, exc_info=True)
        logger.warning("Continuing without Cosmos DB initialization")
        return False
