"""
User model with credentials and saved listings.
Handles accounts of buyers, renters and property owners.
"""

from sqlalchemy import String, Integer, JSON
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship
from realty.database import Base, TimestampMixin
from realty.models.defaults import DEFAULTS
from passlib.context import CryptContext
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from realty.models.property import Property
    from realty.models.appointment import Appointment

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Integer array on PostgreSQL, JSON list elsewhere
SavedPropertiesType = ARRAY(Integer).with_variant(JSON(), "sqlite")


class User(TimestampMixin, Base):
    """
    User model for account data.
    Stores a bcrypt hash of the password, never the password itself.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Login name - must be unique"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User's display name"
    )

    saved_properties: Mapped[List[int]] = mapped_column(
        SavedPropertiesType,
        nullable=False,
        default=DEFAULTS.saved_properties,
        comment="IDs of properties the user saved, in saving order"
    )

    # Relationships
    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        lazy="noload"
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        "Appointment",
        back_populates="user",
        lazy="noload"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, username={self.username})>"

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        if not password:
            raise ValueError("Password cannot be empty")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify a password against the stored hash.

        Args:
            password: Plain text password to verify

        Returns:
            True if password matches, False otherwise
        """
        if not password:
            return False
        return pwd_context.verify(password, self.password_hash)

    def set_password(self, password: str) -> None:
        """Set a new password for the user."""
        self.password_hash = self.hash_password(password)

    def has_saved(self, property_id: int) -> bool:
        """Check whether a property is in the user's saved list."""
        return property_id in (self.saved_properties or [])
