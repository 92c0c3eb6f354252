"""
Repository layer for data access operations.
"""

from realty.repositories.base import BaseRepository
from realty.repositories.property import PropertyRepository, PropertySearchCriteria
from realty.repositories.user import UserRepository
from realty.repositories.appointment import AppointmentRepository
from realty.repositories.agent import AgentRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchCriteria",
    "UserRepository",
    "AppointmentRepository",
    "AgentRepository"
]
