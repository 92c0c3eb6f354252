"""
Appointment API endpoints for booking and managing property viewings.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import List, Optional

from realty.services.appointment import AppointmentService
from realty.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate
)
from realty.utils.dependencies import get_appointment_service
from realty.utils.exceptions import BadRequestError
from realty.schemas.common import MAX_INT
from realty.schemas.error import get_crud_error_responses, get_error_responses


router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule viewing",
    description="Book a viewing on an available property. New appointments start as pending.",
    responses=get_crud_error_responses()
)
async def schedule_appointment(
    appointment_data: AppointmentCreate,
    appointment_service: AppointmentService = Depends(get_appointment_service)
) -> AppointmentResponse:
    """
    Schedule a property viewing.

    Raises:
        PropertyNotFoundError: If the property does not exist
        PropertyUnavailableError: If the property is not available
    """
    appointment = await appointment_service.schedule_appointment(appointment_data)
    return AppointmentResponse.model_validate(appointment)


@router.get(
    "",
    response_model=List[AppointmentResponse],
    summary="List appointments",
    description="Appointments for a user or for a property, soonest first. Exactly one filter is required.",
    responses=get_error_responses(400, 404)
)
async def list_appointments(
    user_id: Optional[int] = Query(None, alias="userId", le=MAX_INT),
    property_id: Optional[int] = Query(None, alias="propertyId", le=MAX_INT),
    appointment_service: AppointmentService = Depends(get_appointment_service)
) -> List[AppointmentResponse]:
    if (user_id is None) == (property_id is None):
        raise BadRequestError("Provide exactly one of userId or propertyId")

    if user_id is not None:
        appointments = await appointment_service.list_for_user(user_id)
    else:
        appointments = await appointment_service.list_for_property(property_id)

    return [AppointmentResponse.model_validate(appointment) for appointment in appointments]


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentResponse,
    summary="Confirm or cancel appointment",
    description="Pending appointments can be confirmed or cancelled; confirmed ones can be cancelled.",
    responses=get_error_responses(400, 404, 422)
)
async def update_appointment_status(
    status_update: AppointmentStatusUpdate,
    appointment_id: int = Path(..., le=MAX_INT, description="Appointment ID"),
    appointment_service: AppointmentService = Depends(get_appointment_service)
) -> AppointmentResponse:
    appointment = await appointment_service.update_status(appointment_id, status_update.status)
    return AppointmentResponse.model_validate(appointment)
