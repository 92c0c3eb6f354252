"""
Default values applied when a field is absent at creation time.
Shared by the insert schemas and the ORM column defaults.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from realty.models.enums import AppointmentStatus, PropertyStatus


@dataclass(frozen=True)
class EntityDefaults:
    featured: bool = False
    property_status: PropertyStatus = PropertyStatus.AVAILABLE
    avg_rating: str = "0"
    rating_count: int = 0
    appointment_status: AppointmentStatus = AppointmentStatus.PENDING

    def saved_properties(self) -> List[int]:
        """Fresh empty collection; lists cannot be shared defaults."""
        return []

    @property
    def avg_rating_decimal(self) -> Decimal:
        return Decimal(self.avg_rating)


DEFAULTS = EntityDefaults()
