"""Listing store: create, list newest first, delete."""

import logging
import threading
from abc import ABC, abstractmethod

from livestock_common.config.store_config import StoreConfig
from livestock_common.exceptions import NotFoundError
from livestock_common.infra.cosmos.cosmos_base import BaseCosmosClient
from livestock_common.models.listing import Listing, ListingCreate

logger = logging.getLogger(__name__)


class ListingStore(ABC):
    """Abstract interface for the listing store."""

    def create_listing(self, payload: ListingCreate, owner_id: str | None = None) -> Listing:
        """Persist a new listing from a validated payload.

        The listing always starts unverified. Photo URLs are stored as given.
        """
        listing = Listing.from_create(payload, owner_id=owner_id)
        return self._insert(listing)

    @abstractmethod
    def _insert(self, listing: Listing) -> Listing:
        pass

    @abstractmethod
    def get_listing(self, listing_id: str) -> Listing | None:
        """Get a listing by ID."""
        pass

    @abstractmethod
    def list_listings(self) -> list[Listing]:
        """List all listings, newest first."""
        pass

    @abstractmethod
    def delete_listing(self, listing_id: str) -> None:
        """Delete a listing permanently.

        Raises:
            NotFoundError: If no listing has this ID
        """
        pass


class InMemoryListingStore(ListingStore):
    """Process-local listing store for development and tests."""

    def __init__(self) -> None:
        self._listings: dict[str, Listing] = {}
        self._lock = threading.Lock()

    def _insert(self, listing: Listing) -> Listing:
        with self._lock:
            self._listings[listing.id] = listing
        return listing

    def get_listing(self, listing_id: str) -> Listing | None:
        return self._listings.get(listing_id)

    def list_listings(self) -> list[Listing]:
        with self._lock:
            newest_inserted_first = list(reversed(self._listings.values()))
        # Stable sort keeps insertion order (newest first) for equal timestamps
        return sorted(newest_inserted_first, key=lambda listing: listing.created_at, reverse=True)

    def delete_listing(self, listing_id: str) -> None:
        with self._lock:
            if self._listings.pop(listing_id, None) is None:
                raise NotFoundError("Animal not found")


class CosmosListingStore(ListingStore):
    """Cosmos DB implementation of ListingStore, partitioned by listing id."""

    def __init__(self, config: StoreConfig | None = None, client: BaseCosmosClient[Listing] | None = None) -> None:
        """Initialize Cosmos DB listing store.

        Args:
            config: Store configuration. If None, will load from environment.
            client: Pre-built Cosmos client. If None, creates a new one.
        """
        if client is None:
            if config is None:
                from livestock_common.config.store_config import get_store_config

                config = get_store_config()
            client = BaseCosmosClient[Listing](
                container_name=config.listings_container,
                partition_key_path="/id",
                config=config,
            )
        self.client = client

    def _insert(self, listing: Listing) -> Listing:
        created = self.client.create_item(item=listing)
        logger.info("Created listing %s", listing.id)
        return Listing.model_validate(created)

    def get_listing(self, listing_id: str) -> Listing | None:
        item = self.client.read_item(item_id=listing_id, partition_key=listing_id)
        if item is None:
            return None
        return Listing.model_validate(item)

    def list_listings(self) -> list[Listing]:
        # createdAt is stored as an ISO-8601 UTC string, which sorts chronologically
        items = self.client.query_items(query="SELECT * FROM c ORDER BY c.createdAt DESC")
        return [Listing.model_validate(item) for item in items]

    def delete_listing(self, listing_id: str) -> None:
        if not self.client.delete_item(item_id=listing_id, partition_key=listing_id):
            raise NotFoundError("Animal not found")
        logger.info("Deleted listing %s", listing_id)
