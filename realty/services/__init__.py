"""
Service layer for business logic implementation.
Contains services for users, listings, appointments, agents and error handling.
"""

from .user import UserService
from .property import PropertyService
from .appointment import AppointmentService
from .agent import AgentService
from .error_handler import ErrorHandlerService

__all__ = [
    "UserService",
    "PropertyService",
    "AppointmentService",
    "AgentService",
    "ErrorHandlerService"
]
