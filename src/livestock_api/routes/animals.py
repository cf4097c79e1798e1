"""Listing routes: browse, create and delete animals for sale."""

import logging

from fastapi import APIRouter, Depends

from livestock_api.config import Settings
from livestock_api.models.responses import AnimalListResponse, AnimalResponse, ApiResponse
from livestock_api.services import get_app_settings, get_listing_store, get_notification_store
from livestock_api.services.auth import get_listing_actor
from livestock_common.exceptions import ForbiddenError, NotFoundError
from livestock_common.models.listing import ListingCreate
from livestock_common.models.user import AuthenticatedIdentity
from livestock_common.services.listing_store import ListingStore
from livestock_common.services.notification_store import NotificationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/animals", tags=["animals"], redirect_slashes=False)


@router.get("", response_model=AnimalListResponse)
@router.get("/", response_model=AnimalListResponse)
async def list_animals(store: ListingStore = Depends(get_listing_store)) -> AnimalListResponse:
    """Return all listings, newest first."""
    animals = store.list_listings()
    return AnimalListResponse(message=f"{len(animals)} listings", animals=animals)


@router.post("", response_model=AnimalResponse)
@router.post("/", response_model=AnimalResponse)
async def create_animal(
    payload: ListingCreate,
    actor: AuthenticatedIdentity | None = Depends(get_listing_actor),
    store: ListingStore = Depends(get_listing_store),
    notifications: NotificationStore = Depends(get_notification_store),
) -> AnimalResponse:
    """Create a listing from a validated payload.

    Args:
        payload: Listing fields; photos must hold at least one uploaded URL
        actor: Authenticated seller, if a usable bearer token was sent
        store: Listing store
        notifications: Notification store for the seller's confirmation

    Returns:
        The created listing, always unverified
    """
    owner_id = None
    if actor is not None:
        # Seller contact is a snapshot of the account at creation time
        payload = payload.model_copy(
            update={"seller_name": actor.name, "seller_phone": actor.phone, "seller_email": actor.email}
        )
        owner_id = actor.user_id

    animal = store.create_listing(payload, owner_id=owner_id)

    if actor is not None:
        try:
            notifications.create(actor.user_id, f"Your listing '{animal.title}' is now live", type="listing")
        except Exception as e:
            # Confirmation is best effort; the listing already exists
            logger.warning("Could not notify user %s about listing %s: %s", actor.user_id, animal.id, e)

    return AnimalResponse(message="Animal created", animal=animal)


@router.delete("/{animal_id}", response_model=ApiResponse)
async def delete_animal(
    animal_id: str,
    actor: AuthenticatedIdentity | None = Depends(get_listing_actor),
    settings: Settings = Depends(get_app_settings),
    store: ListingStore = Depends(get_listing_store),
) -> ApiResponse:
    """Delete a listing permanently. There is no sold or reserved state."""
    if settings.require_auth_for_listings:
        listing = store.get_listing(animal_id)
        if listing is None:
            raise NotFoundError("Animal not found")
        if actor is None or listing.owner_id != actor.user_id:
            raise ForbiddenError("Only the seller can delete this listing")

    store.delete_listing(animal_id)
    return ApiResponse(message="Animal deleted")
