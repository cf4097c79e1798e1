"""Tests for the Cosmos DB stores against a mocked container client."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from livestock_api.config import Settings
from livestock_api.main import create_app
from livestock_api.services.cosmos_db_init import initialize_cosmos_db

from livestock_common.exceptions import ConflictError, NotFoundError
from livestock_common.infra.cosmos.cosmos_base import BaseCosmosClient, strip_system_fields
from livestock_common.models.listing import ListingCreate
from livestock_common.models.notification import Notification
from livestock_common.models.user import User
from livestock_common.services.listing_store import CosmosListingStore
from livestock_common.services.notification_store import CosmosNotificationStore
from livestock_common.services.user_store import CosmosUserStore


def _echo_create(item) -> dict:
    return {**item.model_dump(mode="json", by_alias=True), "_etag": "x", "_ts": 1}


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock(spec=BaseCosmosClient)
    mock.create_item.side_effect = lambda item: strip_system_fields(_echo_create(item))
    return mock


@pytest.mark.unit
def test_strip_system_fields() -> None:
    assert strip_system_fields({"id": "1", "_rid": "r", "_self": "s", "title": "t"}) == {"id": "1", "title": "t"}


@pytest.mark.unit
def test_listing_is_stored_with_camel_case_keys(client: MagicMock) -> None:
    store = CosmosListingStore(client=client)
    payload = ListingCreate(
        title="Murrah buffalo",
        animal_type="Buffalo",
        breed="Murrah",
        age="4 years",
        price=90000,
        location="Karnal",
        photos=["/uploads/1-a.jpg"],
    )

    listing = store.create_listing(payload)

    stored = client.create_item.call_args.kwargs["item"].model_dump(mode="json", by_alias=True)
    assert stored["animalType"] == "Buffalo"
    assert stored["verified"] is False
    assert listing.animal_type == "Buffalo"


@pytest.mark.unit
def test_list_listings_orders_in_query(client: MagicMock) -> None:
    client.query_items.return_value = []

    assert CosmosListingStore(client=client).list_listings() == []
    assert "ORDER BY c.createdAt DESC" in client.query_items.call_args.kwargs["query"]


@pytest.mark.unit
def test_delete_missing_listing_raises_not_found(client: MagicMock) -> None:
    client.delete_item.return_value = False

    with pytest.raises(NotFoundError):
        CosmosListingStore(client=client).delete_listing("missing")
    client.delete_item.assert_called_once_with(item_id="missing", partition_key="missing")


@pytest.mark.unit
def test_add_user_with_taken_email_conflicts(client: MagicMock) -> None:
    existing = User(name="Asha", email="a@x.com", phone="555", password_hash="h")
    client.query_items.return_value = [existing.model_dump(mode="json", by_alias=True)]

    with pytest.raises(ConflictError):
        CosmosUserStore(client=client).add_user(User(name="Other", email="a@x.com", phone="1", password_hash="h"))
    client.create_item.assert_not_called()


@pytest.mark.unit
def test_get_user_reads_by_id_partition(client: MagicMock) -> None:
    client.read_item.return_value = None

    assert CosmosUserStore(client=client).get_user("u1") is None
    client.read_item.assert_called_once_with(item_id="u1", partition_key="u1")


@pytest.mark.unit
def test_notifications_are_queried_within_user_partition(client: MagicMock) -> None:
    client.query_items.return_value = []

    CosmosNotificationStore(client=client).list_for_user("u1")

    kwargs = client.query_items.call_args.kwargs
    assert kwargs["partition_key"] == "u1"
    assert kwargs["parameters"] == [{"name": "@userId", "value": "u1"}]


@pytest.mark.unit
def test_mark_all_read_updates_each_unread_item(client: MagicMock) -> None:
    client.query_items.return_value = [{"id": "n1"}, {"id": "n2"}]

    changed = CosmosNotificationStore(client=client).mark_all_read("u1")

    assert changed == 2
    client.update_item.assert_any_call(item_id="n1", partition_key="u1", updates={"read": True})
    client.update_item.assert_any_call(item_id="n2", partition_key="u1", updates={"read": True})


@pytest.mark.unit
def test_stored_timestamps_order_as_strings_within_one_second() -> None:
    whole_second = datetime(2026, 1, 1, 10, 0, 0, tzinfo=UTC)
    stamps = [
        Notification(user_id="u1", message="m", created_at=whole_second + timedelta(microseconds=us)).to_document()[
            "createdAt"
        ]
        for us in (400000, 0, 123456)
    ]

    assert stamps[1] == "2026-01-01T10:00:00.000000Z"
    assert sorted(stamps) == [stamps[1], stamps[2], stamps[0]]


@pytest.fixture
def cosmos_settings(settings: Settings) -> Settings:
    return settings.model_copy(
        update={"azure_cosmosdb_endpoint": "https://cosmos.example.com:443/", "azure_cosmosdb_key": "a2V5"}
    )


@pytest.mark.unit
def test_unreachable_cosmos_at_startup_is_logged_not_raised(
    cosmos_settings: Settings, caplog: pytest.LogCaptureFixture
) -> None:
    with patch("livestock_api.services.cosmos_db_init.CosmosClient", side_effect=ConnectionError("unreachable")):
        assert asyncio.run(initialize_cosmos_db(cosmos_settings)) is False

    assert "Failed to initialize Cosmos DB" in caplog.text


@pytest.mark.unit
def test_store_that_fails_to_build_is_rebuilt_on_next_request(cosmos_settings: Settings) -> None:
    container = MagicMock()
    container.query_items.return_value = []
    cosmos = MagicMock()
    cosmos.get_database_client.return_value.get_container_client.return_value = container
    attempts = []

    def connect(url, credential):
        attempts.append(url)
        if len(attempts) == 1:
            raise ConnectionError("unreachable")
        return cosmos

    with (
        patch("livestock_api.services.cosmos_db_init.CosmosClient", side_effect=ConnectionError("unreachable")),
        patch("livestock_common.infra.cosmos.cosmos_base.CosmosClient", side_effect=connect),
        TestClient(create_app(cosmos_settings)) as api,
    ):
        outage = api.get("/api/animals")
        recovered = api.get("/api/animals")

    assert outage.status_code == 500
    assert outage.json() == {"ok": False, "message": "Storage unavailable"}
    assert recovered.status_code == 200
    assert recovered.json()["animals"] == []
    assert len(attempts) == 2
