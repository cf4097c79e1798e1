"""Listing (animal for sale) models."""

from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints

from livestock_common.models.base import CamelModel, Timestamp, new_id, utcnow

PhotoUrl = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ListingCreate(CamelModel):
    """Fields a client submits to create a listing.

    Seller fields are only used when the request is anonymous; an
    authenticated request snapshots them from the user record instead.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = Field(..., min_length=1, max_length=200)
    animal_type: str = Field(..., min_length=1)
    breed: str = Field(..., min_length=1)
    age: str = Field(..., min_length=1, description="Free text, e.g. '2 years'")
    price: float = Field(..., gt=0, allow_inf_nan=False)
    location: str = Field(..., min_length=1)
    description: str = ""
    photos: list[PhotoUrl] = Field(..., min_length=1, description="URLs returned by the upload endpoint")
    seller_name: str = ""
    seller_phone: str = ""
    seller_email: str = ""


class Listing(CamelModel):
    """Persisted listing."""

    id: str = Field(default_factory=new_id)
    title: str
    animal_type: str
    breed: str
    age: str
    price: float
    location: str
    description: str = ""
    photos: list[str]
    seller_name: str = ""
    seller_phone: str = ""
    seller_email: str = ""
    verified: bool = False
    rating: float = 4.5
    owner_id: str | None = None
    created_at: Timestamp = Field(default_factory=utcnow)
    updated_at: Timestamp = Field(default_factory=utcnow)

    @classmethod
    def from_create(cls, payload: ListingCreate, owner_id: str | None = None) -> "Listing":
        now = utcnow()
        return cls(
            **payload.model_dump(),
            verified=False,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
