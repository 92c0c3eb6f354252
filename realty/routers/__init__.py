"""
API route handlers for the Realty Listings API.
"""

from .users import router as users_router
from .properties import router as properties_router
from .appointments import router as appointments_router
from .agents import router as agents_router

__all__ = ["users_router", "properties_router", "appointments_router", "agents_router"]
