"""
Pydantic schemas for request/response validation.
"""

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserResponse,
    LoginRequest,
    SavedPropertiesResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyResponse,
    PropertyListResponse,
    PropertyStatusUpdate,
    PropertyRatingCreate
)

# Appointment schemas
from .appointment import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentResponse
)

# Agent schemas
from .agent import (
    AgentCreate,
    AgentResponse
)

# Search filter contract
from .filters import PropertyFilter

__all__ = [
    # User
    "UserBase",
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "SavedPropertiesResponse",

    # Property
    "PropertyCreate",
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyStatusUpdate",
    "PropertyRatingCreate",

    # Appointment
    "AppointmentCreate",
    "AppointmentStatusUpdate",
    "AppointmentResponse",

    # Agent
    "AgentCreate",
    "AgentResponse",

    # Filters
    "PropertyFilter"
]
