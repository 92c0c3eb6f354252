"""
Pydantic schemas for user requests and responses.
Handles registration payloads, saved listings and login.
"""

from pydantic import BeforeValidator, EmailStr, Field, field_validator
from typing import Annotated, List, Optional
from datetime import datetime

from realty.models.defaults import DEFAULTS
from realty.schemas.common import CamelModel, RequiredText, SavedPropertyIds
from realty.utils.validators import reject_blank


class UserBase(CamelModel):
    """Base user schema with common fields."""

    username: RequiredText = Field(
        ...,
        max_length=100,
        description="Unique login name",
        examples=["jdoe"]
    )

    email: Annotated[EmailStr, BeforeValidator(reject_blank)] = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"]
    )

    full_name: RequiredText = Field(
        ...,
        max_length=255,
        description="User's display name",
        examples=["Jane Doe"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class UserCreate(UserBase):
    """
    Schema for registering a new user.
    The password is hashed before it reaches the database.
    """

    password: RequiredText = Field(
        ...,
        max_length=128,
        description="User's password",
        examples=["correct-horse-battery"]
    )

    saved_properties: SavedPropertyIds = Field(
        default_factory=DEFAULTS.saved_properties,
        description="IDs of saved properties, as a list or a comma separated string"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "jdoe",
                "email": "jane@example.com",
                "fullName": "Jane Doe",
                "password": "correct-horse-battery",
            }
        }
    }


class UserResponse(CamelModel):
    """User response schema (excluding the password hash)."""

    model_config = {"from_attributes": True}

    id: int
    username: str
    email: str
    full_name: str
    saved_properties: SavedPropertyIds = Field(default_factory=list)
    created_at: Optional[datetime] = None


class LoginRequest(CamelModel):
    """Credentials check request."""

    username: RequiredText
    password: RequiredText


class SavedPropertiesResponse(CamelModel):
    """IDs a user has saved, in saving order."""

    user_id: int
    saved_properties: List[int]
