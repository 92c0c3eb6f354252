"""
Appointment repository for viewing requests.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from realty.repositories.base import BaseRepository
from realty.models.appointment import Appointment
from typing import List
import logging

logger = logging.getLogger(__name__)


class AppointmentRepository(BaseRepository[Appointment]):
    """Repository for appointments, listed by viewing date."""

    def __init__(self, db: AsyncSession):
        super().__init__(Appointment, db)

    async def list_by(self, field: str, value: int) -> List[Appointment]:
        try:
            query = (
                select(Appointment)
                .where(getattr(Appointment, field) == value)
                .order_by(Appointment.date, Appointment.id)
            )
            result = await self.db.execute(query)
            appointments = result.scalars().all()
            logger.debug(f"Retrieved {len(appointments)} appointments for {field}={value}")
            return list(appointments)
        except Exception as e:
            logger.error(f"Failed to list appointments for {field}={value}: {e}")
            raise

    async def get_for_user(self, user_id: int) -> List[Appointment]:
        """Appointments requested by a user, soonest first."""
        return await self.list_by("user_id", user_id)

    async def get_for_property(self, property_id: int) -> List[Appointment]:
        """Appointments booked on a property, soonest first."""
        return await self.list_by("property_id", property_id)
