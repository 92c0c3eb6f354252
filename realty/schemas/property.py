"""
Pydantic schemas for property requests and responses.
Handles listing creation, status changes, ratings and paginated results.
"""

from pydantic import BeforeValidator, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from typing import Annotated, List, Optional
from datetime import datetime
from decimal import Decimal

from realty.models.defaults import DEFAULTS
from realty.models.enums import ListingType, PropertyStatus
from realty.schemas.common import (
    CamelModel,
    CountInt,
    DecimalText,
    OptionalCount,
    ReferenceId,
    RequiredText,
    StoredDecimal,
    Tag,
)
from realty.utils.validators import default_if_none

MAX_RATING = Decimal("5")


class PropertyCreate(CamelModel):
    """
    Schema for creating a new property listing.
    Prices and coordinates come back as decimal text; counts as integers.
    """

    title: RequiredText = Field(..., max_length=255, examples=["Sunny 3BR bungalow"])
    description: RequiredText = Field(..., examples=["Renovated kitchen, large backyard."])

    price: DecimalText = Field(
        ...,
        description="Asking price or monthly rent, as a number or decimal string",
        examples=["250000"]
    )

    address: RequiredText = Field(..., max_length=255, examples=["123 Palm Ave"])
    city: RequiredText = Field(..., max_length=120, examples=["Pasadena"])
    state: RequiredText = Field(..., max_length=120, examples=["CA"])
    zip_code: RequiredText = Field(..., max_length=20, examples=["91101"])

    lat: DecimalText = Field(..., description="Latitude", examples=["34.1478"])
    lng: DecimalText = Field(..., description="Longitude", examples=["-118.1445"])

    bedrooms: CountInt = Field(..., ge=0, le=100, examples=[3])
    bathrooms: CountInt = Field(..., ge=0, le=100, examples=[2])
    square_feet: CountInt = Field(..., ge=0, examples=[1850])
    year_built: OptionalCount = Field(None, ge=1000, le=2100, examples=[1998])

    property_type: RequiredText = Field(..., max_length=50, examples=["house"])
    listing_type: Annotated[ListingType, Tag] = Field(..., examples=["buy"])
    image_url: RequiredText = Field(..., max_length=1024)
    user_id: ReferenceId = Field(..., description="ID of the listing owner")

    featured: Annotated[bool, BeforeValidator(default_if_none(DEFAULTS.featured))] = DEFAULTS.featured

    status: Annotated[
        PropertyStatus, Tag, BeforeValidator(default_if_none(DEFAULTS.property_status))
    ] = DEFAULTS.property_status

    # Declared before avg_rating so the rating check can see it
    rating_count: Annotated[CountInt, BeforeValidator(default_if_none(DEFAULTS.rating_count))] = Field(DEFAULTS.rating_count, ge=0)

    avg_rating: Annotated[
        DecimalText, BeforeValidator(default_if_none(DEFAULTS.avg_rating))
    ] = DEFAULTS.avg_rating

    @field_validator("lat")
    @classmethod
    def validate_lat(cls, v):
        if not Decimal("-90") <= Decimal(v) <= Decimal("90"):
            raise PydanticCustomError("shape_mismatch", "Latitude must be between -90 and 90")
        return v

    @field_validator("lng")
    @classmethod
    def validate_lng(cls, v):
        if not Decimal("-180") <= Decimal(v) <= Decimal("180"):
            raise PydanticCustomError("shape_mismatch", "Longitude must be between -180 and 180")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if Decimal(v) < 0:
            raise PydanticCustomError("shape_mismatch", "Price cannot be negative")
        return v

    @field_validator("avg_rating")
    @classmethod
    def validate_avg_rating(cls, v, info: ValidationInfo):
        """An average only means something once there are ratings."""
        rating = Decimal(v)
        if not Decimal("0") <= rating <= MAX_RATING:
            raise PydanticCustomError("shape_mismatch", "Average rating must be between 0 and 5")
        if info.data.get("rating_count") == 0 and rating != 0:
            raise PydanticCustomError(
                "shape_mismatch", "Average rating must be 0 when there are no ratings"
            )
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Sunny 3BR bungalow",
                "description": "Renovated kitchen, large backyard.",
                "price": 250000,
                "address": "123 Palm Ave",
                "city": "Pasadena",
                "state": "CA",
                "zipCode": "91101",
                "lat": 34.1478,
                "lng": -118.1445,
                "bedrooms": "3",
                "bathrooms": 2,
                "squareFeet": 1850,
                "yearBuilt": "",
                "propertyType": "house",
                "listingType": "buy",
                "imageUrl": "https://images.example.com/1.jpg",
                "userId": 1,
            }
        }
    }


class PropertyResponse(CamelModel):
    """Schema for property response; decimals are serialized as text."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    description: str
    price: StoredDecimal
    address: str
    city: str
    state: str
    zip_code: str
    lat: StoredDecimal
    lng: StoredDecimal
    bedrooms: int
    bathrooms: int
    square_feet: int
    year_built: Optional[int] = None
    property_type: str
    listing_type: ListingType
    image_url: str
    user_id: int
    featured: bool
    status: PropertyStatus
    avg_rating: StoredDecimal
    rating_count: int
    created_at: Optional[datetime] = None


class PropertyStatusUpdate(CamelModel):
    """Schema for changing a listing's status."""

    status: Annotated[PropertyStatus, Tag]
    user_id: ReferenceId = Field(..., description="ID of the user making the change")


class PropertyRatingCreate(CamelModel):
    """A single 1-5 rating for a property."""

    rating: CountInt = Field(..., ge=1, le=5)


class PropertyListResponse(CamelModel):
    """Schema for paginated property list response."""

    properties: List[PropertyResponse]
    total: int = Field(..., examples=[150])
    page: int = Field(..., examples=[1])
    page_size: int = Field(..., examples=[20])
    total_pages: int = Field(..., examples=[8])
    has_next: bool
    has_previous: bool
