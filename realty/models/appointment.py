"""
Appointment model for property viewings.
"""

from sqlalchemy import Text, Integer, DateTime, Enum as SQLEnum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from realty.database import Base, TimestampMixin
from realty.models.defaults import DEFAULTS
from realty.models.enums import AppointmentStatus, APPOINTMENT_TRANSITIONS
from datetime import datetime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from realty.models.property import Property
    from realty.models.user import User


class Appointment(TimestampMixin, Base):
    """
    A viewing requested by a user for a property.
    Status moves from pending to confirmed or cancelled.
    """

    __tablename__ = "appointments"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        comment="Requested viewing date and time"
    )

    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[AppointmentStatus] = mapped_column(
        SQLEnum(
            AppointmentStatus,
            name="appointment_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        nullable=False,
        default=DEFAULTS.appointment_status,
        index=True
    )

    property: Mapped["Property"] = relationship(
        "Property",
        back_populates="appointments",
        lazy="noload"
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="appointments",
        lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, property_id={self.property_id}, status={self.status})>"

    def can_transition_to(self, new_status: AppointmentStatus) -> bool:
        """Check whether moving to new_status is allowed from the current status."""
        return new_status in APPOINTMENT_TRANSITIONS.get(self.status, set())
