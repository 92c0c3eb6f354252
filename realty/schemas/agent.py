"""
Pydantic schemas for agent profiles.
"""

from decimal import Decimal
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from realty.schemas.common import CamelModel, CountInt, DecimalText, RequiredText, StoredDecimal


class AgentCreate(CamelModel):
    """Schema for creating an agent profile."""

    name: RequiredText = Field(..., max_length=255, examples=["Sarah Johnson"])
    specialization: RequiredText = Field(..., max_length=255, examples=["Luxury Homes"])
    rating: DecimalText = Field(..., examples=["4.9"])
    properties_sold: CountInt = Field(..., ge=0, examples=[124])
    image_url: RequiredText = Field(..., max_length=1024)

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v):
        if not Decimal("0") <= Decimal(v) <= Decimal("5"):
            raise PydanticCustomError("shape_mismatch", "Rating must be between 0 and 5")
        return v


class AgentResponse(CamelModel):
    """Agent profile as returned to clients."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    specialization: str
    rating: StoredDecimal
    properties_sold: int
    image_url: str
