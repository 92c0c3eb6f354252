"""
Property service for managing listings with business rule validation.
Handles creation, search, status changes, ratings and owner-only deletion.
"""

from typing import Any, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from realty.config import settings
from realty.repositories.property import PropertyRepository, PropertySearchCriteria
from realty.repositories.user import UserRepository
from realty.models.property import Property
from realty.models.enums import PropertyStatus
from realty.schemas.filters import PropertyFilter
from realty.schemas.property import PropertyCreate
from realty.validation import EntityKind, validate_filter, validate_insert
from realty.utils.exceptions import (
    BadRequestError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    UserNotFoundError,
    ValidationError,
)
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listings and their business rules.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_property(self, payload: Any) -> Property:
        """
        Create a new listing for an existing owner.

        Args:
            payload: Mapping or PropertyCreate instance

        Returns:
            Created property instance

        Raises:
            PayloadValidationError: If the payload does not validate
            UserNotFoundError: If the owner does not exist
        """
        property_data = payload if isinstance(payload, PropertyCreate) else validate_insert(EntityKind.PROPERTY, payload)

        try:
            if not await self.user_repo.exists(property_data.user_id):
                raise UserNotFoundError(property_data.user_id)

            property_obj = await self.property_repo.create_property(property_data.model_dump())
            logger.info(
                f"Property created by user {property_data.user_id}: {property_obj.title} (ID: {property_obj.id})"
            )
            return property_obj
        except (ValidationError, NotFoundError):
            raise
        except ValueError as e:
            raise BadRequestError(f"Failed to create property: {e}")

    async def get_property(self, property_id: int) -> Property:
        """
        Raises:
            PropertyNotFoundError: If no property has this ID
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(property_id)
        return property_obj

    async def search_properties(
        self,
        search_filter: Any = None,
        page: int = 1,
        page_size: int = None
    ) -> Tuple[List[Property], int]:
        """
        Search listings by the text filter with page-based pagination.

        Args:
            search_filter: PropertyFilter or raw query mapping
            page: 1-based page number
            page_size: Results per page, capped by max_page_size

        Returns:
            Tuple of (properties on the page, total matches)

        Raises:
            PayloadValidationError: If the filter shape or a bound is invalid
        """
        if not isinstance(search_filter, PropertyFilter):
            search_filter = validate_filter(search_filter)

        criteria = PropertySearchCriteria.from_filter(search_filter)

        page = max(page, 1)
        page_size = min(max(page_size or settings.default_page_size, 1), settings.max_page_size)
        skip = (page - 1) * page_size

        properties, total_count = await self.property_repo.search_properties(
            criteria, skip=skip, limit=page_size
        )
        logger.debug(f"Property search page {page} returned {len(properties)} of {total_count} results")
        return properties, total_count

    async def list_featured(self, limit: int = None) -> List[Property]:
        """Featured listings that are still available."""
        return await self.property_repo.get_featured(limit or settings.featured_limit)

    async def update_status(self, property_id: int, new_status: PropertyStatus, user_id: int) -> Property:
        """
        Change a listing's status. Only the owner may do this.

        Raises:
            PropertyNotFoundError: If the property does not exist
            PropertyOwnershipError: If user_id is not the owner
        """
        property_obj = await self.get_property(property_id)
        self._ensure_owner(property_obj, user_id)

        if property_obj.status == new_status:
            return property_obj

        updated_property = await self.property_repo.update(property_id, {"status": new_status})
        logger.info(f"Property {property_id} status changed to {new_status.value} by user {user_id}")
        return updated_property

    async def rate_property(self, property_id: int, rating: int) -> Property:
        """
        Record a 1-5 rating, updating the average and count together.

        Raises:
            BadRequestError: If the rating is out of range
            PropertyNotFoundError: If the property does not exist
        """
        if not 1 <= rating <= 5:
            raise BadRequestError("Rating must be between 1 and 5")

        property_obj = await self.property_repo.add_rating(property_id, rating)
        if not property_obj:
            raise PropertyNotFoundError(property_id)
        return property_obj

    async def delete_property(self, property_id: int, user_id: int) -> bool:
        """
        Delete a listing along with its appointments.

        Raises:
            PropertyNotFoundError: If the property does not exist
            PropertyOwnershipError: If user_id is not the owner
        """
        property_obj = await self.get_property(property_id)
        self._ensure_owner(property_obj, user_id)

        deleted = await self.property_repo.delete(property_id)
        if deleted:
            logger.info(f"Property {property_id} deleted by user {user_id}")
        return deleted

    @staticmethod
    def _ensure_owner(property_obj: Property, user_id: int) -> None:
        if property_obj.user_id != user_id:
            raise PropertyOwnershipError()

