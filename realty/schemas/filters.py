"""
Property search filter contract.
Every bound arrives as text; parsing into typed bounds happens on the query side.
"""

from pydantic import ConfigDict
from typing import Optional

from realty.schemas.common import CamelModel, OptionalText

FILTER_FIELDS = (
    "city",
    "min_price",
    "max_price",
    "min_beds",
    "min_baths",
    "property_type",
    "listing_type",
    "min_sqft",
    "max_sqft",
    "min_year",
    "max_year",
)


class PropertyFilter(CamelModel):
    """
    Accepted shape of a property search request.
    All fields are optional strings; empty strings count as absent.
    Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    city: OptionalText = None
    min_price: OptionalText = None
    max_price: OptionalText = None
    min_beds: OptionalText = None
    min_baths: OptionalText = None
    property_type: OptionalText = None
    listing_type: OptionalText = None
    min_sqft: OptionalText = None
    max_sqft: OptionalText = None
    min_year: OptionalText = None
    max_year: OptionalText = None

    def is_empty(self) -> bool:
        """True when no dimension is constrained."""
        return all(getattr(self, name) is None for name in FILTER_FIELDS)

    def active(self) -> dict:
        """Constrained dimensions only, keyed by field name."""
        return {
            name: getattr(self, name)
            for name in FILTER_FIELDS
            if getattr(self, name) is not None
        }
