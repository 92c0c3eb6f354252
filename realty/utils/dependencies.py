"""
FastAPI dependency injection utilities for services and pagination.
"""

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from realty.config import settings
from realty.database import get_db
from realty.schemas.common import MAX_INT
from realty.services.agent import AgentService
from realty.services.appointment import AppointmentService
from realty.services.property import PropertyService
from realty.services.user import UserService


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """
    Get user service instance.

    Args:
        db: Database session

    Returns:
        UserService instance
    """
    return UserService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session

    Returns:
        PropertyService instance
    """
    return PropertyService(db)


async def get_appointment_service(db: AsyncSession = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)


async def get_agent_service(db: AsyncSession = Depends(get_db)) -> AgentService:
    return AgentService(db)


class Pagination:
    """Page-based pagination parameters shared by list endpoints."""

    def __init__(
        self,
        page: int = Query(1, ge=1, le=MAX_INT, description="Page number (1-based)"),
        page_size: int = Query(
            settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            alias="pageSize",
            description="Number of results per page"
        )
    ):
        self.page = page
        self.page_size = page_size

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size
