"""Tests for the in-memory stores and the credential service."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from livestock_common.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from livestock_common.models.listing import Listing, ListingCreate
from livestock_common.models.user import LoginRequest, RegisterRequest
from livestock_common.security.passwords import PasswordHasher
from livestock_common.security.tokens import TokenService
from livestock_common.services.credential_service import CredentialService
from livestock_common.services.listing_store import InMemoryListingStore
from livestock_common.services.notification_store import InMemoryNotificationStore
from livestock_common.services.user_store import InMemoryUserStore


def _listing(**overrides) -> ListingCreate:
    fields = {
        "title": "Boer goat",
        "animal_type": "Goat",
        "breed": "Boer",
        "age": "1 year",
        "price": 12000,
        "location": "Nashik",
        "photos": ["/uploads/1-a.jpg"],
    }
    fields.update(overrides)
    return ListingCreate(**fields)


@pytest.fixture
def credentials() -> CredentialService:
    return CredentialService(InMemoryUserStore(), TokenService("secret"), PasswordHasher(rounds=4))


@pytest.mark.unit
def test_register_login_authenticate(credentials: CredentialService) -> None:
    registered = credentials.register(
        RegisterRequest(name="Asha", email="a@x.com", phone="555", password="pw1")
    )
    logged_in = credentials.login(LoginRequest(email="a@x.com", password="pw1"))
    identity = credentials.authenticate(logged_in.token)

    assert registered.user.id == logged_in.user.id == identity.user_id
    assert identity.email == "a@x.com"


@pytest.mark.unit
def test_register_duplicate_email(credentials: CredentialService) -> None:
    request = RegisterRequest(name="Asha", email="a@x.com", phone="555", password="pw1")
    credentials.register(request)

    with pytest.raises(ConflictError):
        credentials.register(request)


@pytest.mark.unit
def test_login_unknown_email(credentials: CredentialService) -> None:
    with pytest.raises(InvalidCredentialsError):
        credentials.login(LoginRequest(email="nobody@x.com", password="pw1"))


@pytest.mark.unit
def test_authenticate_without_token(credentials: CredentialService) -> None:
    with pytest.raises(UnauthenticatedError):
        credentials.authenticate(None)


@pytest.mark.unit
def test_identity_is_immutable(credentials: CredentialService) -> None:
    token = credentials.register(RegisterRequest(name="Asha", email="a@x.com", phone="555", password="pw1")).token
    identity = credentials.authenticate(token)

    with pytest.raises(PydanticValidationError):
        identity.user_id = "someone-else"


@pytest.mark.unit
def test_listing_store_orders_by_created_at_descending() -> None:
    store = InMemoryListingStore()
    base = datetime(2026, 1, 1, tzinfo=UTC)
    # Inserted out of chronological order
    for offset in (2, 0, 3, 1):
        listing = Listing.from_create(_listing(title=f"goat {offset}"))
        store._insert(listing.model_copy(update={"created_at": base + timedelta(minutes=offset)}))

    titles = [listing.title for listing in store.list_listings()]

    assert titles == ["goat 3", "goat 2", "goat 1", "goat 0"]


@pytest.mark.unit
def test_listing_store_create_and_delete() -> None:
    store = InMemoryListingStore()
    created = store.create_listing(_listing(), owner_id="user-1")

    assert created.verified is False
    assert created.owner_id == "user-1"
    assert store.get_listing(created.id) == created

    store.delete_listing(created.id)
    with pytest.raises(NotFoundError):
        store.delete_listing(created.id)
    assert store.list_listings() == []


@pytest.mark.unit
def test_listing_create_rejects_empty_photos() -> None:
    with pytest.raises(PydanticValidationError):
        _listing(photos=[])


@pytest.mark.unit
def test_notification_store_scoping_and_defaults() -> None:
    store = InMemoryNotificationStore()
    store.create("a", "hello")
    store.create("b", "other", type="offer")

    [mine] = store.list_for_user("a")

    assert mine.type == "info"
    assert mine.user_id == "a"
    assert store.mark_all_read("a") == 1
    assert store.mark_all_read("a") == 0
    assert store.list_for_user("b")[0].read is False


@pytest.mark.unit
def test_notification_store_rejects_blank_message() -> None:
    with pytest.raises(ValidationError):
        InMemoryNotificationStore().create("a", "  ")
