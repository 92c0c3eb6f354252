"""
Closed value sets for listing, property and appointment tags.
"""

import enum


class ListingType(str, enum.Enum):
    """Whether a property is offered for sale or for rent."""
    BUY = "buy"
    RENT = "rent"


class PropertyStatus(str, enum.Enum):
    """Availability of a listing."""
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"
    RENTED = "rented"


class AppointmentStatus(str, enum.Enum):
    """Lifecycle of a viewing appointment."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Allowed appointment status changes; anything not listed is rejected
APPOINTMENT_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.CANCELLED},
    AppointmentStatus.CANCELLED: set(),
}
