"""
Property model for sale and rental listings.
Handles listing data with location, pricing, ratings and ownership.
"""

from sqlalchemy import (
    String, Text, Integer, Numeric, Boolean, Enum as SQLEnum, Index, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from realty.database import Base, TimestampMixin
from realty.models.defaults import DEFAULTS
from realty.models.enums import ListingType, PropertyStatus
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from realty.models.user import User
    from realty.models.appointment import Appointment

RATING_QUANTUM = Decimal("0.01")


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Property(TimestampMixin, Base):
    """
    Property model for managing sale and rental listings.
    Prices and coordinates are unbounded NUMERIC, so validated decimal text
    is stored without rounding.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("rating_count >= 0", name="ck_properties_rating_count_non_negative"),
    )

    # Basic listing information
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    price: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True),
        nullable=False,
        index=True,
        comment="Asking price or monthly rent"
    )

    # Location information
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(120), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)

    lat: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True),
        nullable=False,
        comment="Latitude coordinate"
    )

    lng: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True),
        nullable=False,
        comment="Longitude coordinate"
    )

    # Property specifications
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    square_feet: Mapped[int] = mapped_column(Integer, nullable=False)
    year_built: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    property_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="House, apartment, condo and so on"
    )

    listing_type: Mapped[ListingType] = mapped_column(
        SQLEnum(ListingType, name="listing_type", values_callable=_enum_values),
        nullable=False,
        index=True
    )

    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)

    # Ownership
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who listed this property"
    )

    # Status and ratings
    featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=DEFAULTS.featured,
        index=True
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus, name="property_status", values_callable=_enum_values),
        nullable=False,
        default=DEFAULTS.property_status,
        index=True
    )

    avg_rating: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True),
        nullable=False,
        default=DEFAULTS.avg_rating_decimal
    )

    rating_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULTS.rating_count
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="properties",
        lazy="noload"
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        "Appointment",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @property
    def is_available(self) -> bool:
        return self.status == PropertyStatus.AVAILABLE

    def add_rating(self, value: int) -> None:
        """
        Fold a new rating into the running average.

        Args:
            value: Rating between 1 and 5

        Raises:
            ValueError: If the rating is out of range
        """
        if not 1 <= value <= 5:
            raise ValueError("Rating must be between 1 and 5")

        count = self.rating_count or 0
        current = Decimal(self.avg_rating or 0)
        total = current * count + value
        self.rating_count = count + 1
        self.avg_rating = (total / self.rating_count).quantize(RATING_QUANTUM, rounding=ROUND_HALF_UP)


# Composite index for the common search: city, listing type and price
city_listing_price_index = Index(
    "idx_properties_city_listing_price",
    Property.city,
    Property.listing_type,
    Property.price
)

# Featured listings shown on the landing page
featured_status_index = Index(
    "idx_properties_featured_status",
    Property.featured,
    Property.status,
    Property.created_at.desc()
)
