"""Shared Pydantic base for documents exchanged with clients and the store."""

import uuid
from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


def iso_utc(value: datetime) -> str:
    """Format as UTC with all six fraction digits, e.g. 2026-01-01T10:00:00.000000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


# Fixed width, so stored timestamps order the same as strings and as times
Timestamp = Annotated[datetime, PlainSerializer(iso_utc, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, as the web client expects.

    Snake_case field names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_document(self) -> dict:
        """Dump to a JSON-safe dictionary keyed by the camelCase aliases."""
        return self.model_dump(mode="json", by_alias=True)
