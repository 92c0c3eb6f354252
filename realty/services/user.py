"""
User service for registration, credential checks and saved listings.
"""

from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession
from realty.repositories.property import PropertyRepository
from realty.repositories.user import UserRepository
from realty.models.user import User
from realty.models.property import Property
from realty.schemas.user import UserCreate
from realty.validation import EntityKind, validate_insert
from realty.utils.exceptions import (
    BadRequestError,
    ConflictError,
    InvalidCredentialsError,
    PropertyNotFoundError,
    UserNotFoundError,
    ValidationError,
)
import logging

logger = logging.getLogger(__name__)


class UserService:
    """
    User service handling accounts and the saved-property list.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def register_user(self, payload: Any) -> User:
        """
        Register a new user from a raw or already validated payload.

        Args:
            payload: Mapping or UserCreate instance

        Returns:
            Created user

        Raises:
            PayloadValidationError: If the payload does not validate
            DuplicateResourceError: If the username or email is taken
            PropertyNotFoundError: If a saved property does not exist
        """
        user_data = payload if isinstance(payload, UserCreate) else validate_insert(EntityKind.USER, payload)

        try:
            await self._ensure_properties_exist(user_data.saved_properties)
            user = await self.user_repo.create_user(user_data.model_dump())
            logger.info(f"User registered: {user.username} (ID: {user.id})")
            return user
        except (ValidationError, ConflictError, PropertyNotFoundError):
            raise
        except ValueError as e:
            raise BadRequestError(str(e))

    async def get_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundError: If no user has this ID
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """
        Verify a username and password pair.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        user = await self.user_repo.authenticate_user(username, password)
        if not user:
            raise InvalidCredentialsError()
        return user

    async def save_property(self, user_id: int, property_id: int) -> List[int]:
        """
        Add a property to a user's saved list. Saving twice keeps one entry.
        The user row is locked while the list is rewritten.

        Returns:
            The saved property IDs after the change
        """
        await self._ensure_properties_exist([property_id])
        user = await self._get_user_for_update(user_id)

        if user.has_saved(property_id):
            logger.debug(f"User {user_id} already saved property {property_id}")
            return list(user.saved_properties)

        updated = await self.user_repo.set_saved_properties(
            user_id, list(user.saved_properties or []) + [property_id]
        )
        logger.info(f"User {user_id} saved property {property_id}")
        return list(updated.saved_properties)

    async def unsave_property(self, user_id: int, property_id: int) -> List[int]:
        """
        Remove a property from a user's saved list. Removing an unsaved ID is a no-op.
        The property need not exist, so IDs of deleted listings can be removed.

        Returns:
            The saved property IDs after the change
        """
        user = await self._get_user_for_update(user_id)

        if not user.has_saved(property_id):
            return list(user.saved_properties or [])

        remaining = [saved for saved in user.saved_properties if saved != property_id]
        updated = await self.user_repo.set_saved_properties(user_id, remaining)
        logger.info(f"User {user_id} removed saved property {property_id}")
        return list(updated.saved_properties)

    async def list_saved_properties(self, user_id: int) -> List[Property]:
        """Saved properties in saving order; deleted listings are skipped."""
        user = await self.get_user(user_id)
        return await self.property_repo.get_by_ids(list(user.saved_properties or []))

    async def _ensure_properties_exist(self, property_ids: List[int]) -> None:
        for property_id in property_ids:
            if not await self.property_repo.exists(property_id):
                raise PropertyNotFoundError(property_id)

    async def _get_user_for_update(self, user_id: int) -> User:
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user
