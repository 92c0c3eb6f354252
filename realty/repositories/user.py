"""
User repository for account management and saved listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from realty.repositories.base import BaseRepository
from realty.models.user import User
from realty.utils.exceptions import DuplicateResourceError
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for users with uniqueness checks and password hashing.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user, hashing the password.

        Args:
            user_data: Canonical user fields including the plain password

        Returns:
            Created user instance

        Raises:
            DuplicateResourceError: If the username or email is taken
        """
        try:
            data = dict(user_data)
            await self.ensure_unique(data["username"], data["email"])

            password = data.pop("password")
            data["password_hash"] = User.hash_password(password)
            data["saved_properties"] = list(dict.fromkeys(data.get("saved_properties") or []))

            created_user = await self.create(data)
            logger.info(f"Created user: {created_user.username} (ID: {created_user.id})")
            return created_user
        except DuplicateResourceError as e:
            logger.info(f"User registration rejected: {e.detail}")
            raise
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def ensure_unique(self, username: str, email: str) -> None:
        """
        Raise DuplicateResourceError if username or email is already registered.
        """
        query = select(User.username, User.email).where(
            or_(User.username == username, func.lower(User.email) == email.lower())
        )
        result = await self.db.execute(query)
        for existing_username, existing_email in result.all():
            if existing_username == username:
                raise DuplicateResourceError("User", "username", username)
            if existing_email.lower() == email.lower():
                raise DuplicateResourceError("User", "email", email)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        return await self.get_by_field("username", username)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for, in any case

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by email: {email}")
            else:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """
        Check a username and password.

        Returns:
            User instance if the credentials match, None otherwise
        """
        user = await self.get_by_username(username)

        if not user:
            logger.debug(f"Authentication failed: user {username} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {username}")
            return None

        logger.info(f"User authenticated successfully: {username}")
        return user

    async def get_for_update(self, user_id: int) -> Optional[User]:
        """
        Load a user with a row lock where the database supports it.
        The row is re-read even if the user is already in the session.
        """
        query = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def set_saved_properties(self, user_id: int, property_ids: List[int]) -> Optional[User]:
        """
        Replace a user's saved list, dropping duplicates but keeping order.

        Returns:
            Updated user instance or None if not found
        """
        saved = list(dict.fromkeys(property_ids))
        updated_user = await self.update(user_id, {"saved_properties": saved})

        if updated_user:
            logger.debug(f"User {user_id} now has {len(saved)} saved properties")

        return updated_user
