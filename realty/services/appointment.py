"""
Appointment service for scheduling viewings and moving them through their lifecycle.
"""

from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession
from realty.repositories.appointment import AppointmentRepository
from realty.repositories.property import PropertyRepository
from realty.repositories.user import UserRepository
from realty.models.appointment import Appointment
from realty.models.enums import AppointmentStatus
from realty.schemas.appointment import AppointmentCreate
from realty.validation import EntityKind, validate_insert
from realty.utils.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyUnavailableError,
    UserNotFoundError,
)
import logging

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Appointment service enforcing availability and status transitions.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.appointment_repo = AppointmentRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def schedule_appointment(self, payload: Any) -> Appointment:
        """
        Book a viewing on an available property.

        Args:
            payload: Mapping or AppointmentCreate instance

        Returns:
            Created appointment

        Raises:
            PayloadValidationError: If the payload does not validate
            PropertyNotFoundError: If the property does not exist
            UserNotFoundError: If the user does not exist
            PropertyUnavailableError: If the property is not available
        """
        appointment_data = (
            payload if isinstance(payload, AppointmentCreate)
            else validate_insert(EntityKind.APPOINTMENT, payload)
        )

        property_obj = await self.property_repo.get_by_id(appointment_data.property_id)
        if not property_obj:
            raise PropertyNotFoundError(appointment_data.property_id)

        if not await self.user_repo.exists(appointment_data.user_id):
            raise UserNotFoundError(appointment_data.user_id)

        if not property_obj.is_available:
            raise PropertyUnavailableError(property_obj.id, property_obj.status.value)

        appointment = await self.appointment_repo.create(appointment_data.model_dump())
        logger.info(
            f"Appointment {appointment.id} scheduled for property {appointment.property_id} "
            f"by user {appointment.user_id}"
        )
        return appointment

    async def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = await self.appointment_repo.get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    async def list_for_user(self, user_id: int) -> List[Appointment]:
        if not await self.user_repo.exists(user_id):
            raise UserNotFoundError(user_id)
        return await self.appointment_repo.get_for_user(user_id)

    async def list_for_property(self, property_id: int) -> List[Appointment]:
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)
        return await self.appointment_repo.get_for_property(property_id)

    async def update_status(self, appointment_id: int, new_status: AppointmentStatus) -> Appointment:
        """
        Confirm or cancel an appointment.

        Raises:
            NotFoundError: If the appointment does not exist
            InvalidStatusTransitionError: If the move is not allowed from the current status
        """
        appointment = await self.get_appointment(appointment_id)

        if not appointment.can_transition_to(new_status):
            raise InvalidStatusTransitionError(
                "Appointment", appointment.status.value, new_status.value
            )

        updated = await self.appointment_repo.update(appointment_id, {"status": new_status})
        logger.info(f"Appointment {appointment_id} moved to {new_status.value}")
        return updated
