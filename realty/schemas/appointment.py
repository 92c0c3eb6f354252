"""
Pydantic schemas for viewing appointments.
"""

from pydantic import BeforeValidator, Field
from typing import Annotated, Optional
from datetime import datetime

from realty.models.defaults import DEFAULTS
from realty.models.enums import AppointmentStatus
from realty.schemas.common import (
    CamelModel,
    FlexibleDateTime,
    OptionalText,
    ReferenceId,
    Tag,
)
from realty.utils.validators import default_if_none


class AppointmentCreate(CamelModel):
    """
    Schema for requesting a viewing.
    The date may be a datetime or an ISO-8601 string.
    """

    property_id: ReferenceId = Field(..., examples=[1])
    user_id: ReferenceId = Field(..., examples=[2])
    date: FlexibleDateTime = Field(..., examples=["2024-05-01T10:00:00Z"])
    message: OptionalText = Field(None, max_length=2000)

    status: Annotated[
        AppointmentStatus, Tag, BeforeValidator(default_if_none(DEFAULTS.appointment_status))
    ] = DEFAULTS.appointment_status


class AppointmentStatusUpdate(CamelModel):
    """Schema for confirming or cancelling an appointment."""

    status: Annotated[AppointmentStatus, Tag]


class AppointmentResponse(CamelModel):
    """Appointment as returned to clients."""

    model_config = {"from_attributes": True}

    id: int
    property_id: int
    user_id: int
    date: datetime
    message: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime] = None
