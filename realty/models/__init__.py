"""
Database models for the Realty Listings API.
Includes User, Property, Appointment and Agent tables.
"""

from realty.models.enums import ListingType, PropertyStatus, AppointmentStatus
from realty.models.user import User
from realty.models.property import Property
from realty.models.appointment import Appointment
from realty.models.agent import Agent

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "Appointment",
    "Agent",
    "ListingType",
    "PropertyStatus",
    "AppointmentStatus",
]
