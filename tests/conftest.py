"""
Test configuration and fixtures for the realty listings API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Must be set before realty.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from typing import AsyncGenerator
from datetime import datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from realty.main import app
from realty.database import Base, get_db, enable_sqlite_foreign_keys
from realty.models import User, Property, Appointment, Agent
from realty.repositories.user import UserRepository
from realty.repositories.property import PropertyRepository
from realty.repositories.appointment import AppointmentRepository
from realty.repositories.agent import AgentRepository
from realty.services.user import UserService
from realty.services.property import PropertyService
from realty.services.appointment import AppointmentService
from realty.services.agent import AgentService


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def test_engine():
    """Fresh schema for every test."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False}
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def appointment_repository(db_session: AsyncSession) -> AppointmentRepository:
    return AppointmentRepository(db_session)


@pytest.fixture
def agent_repository(db_session: AsyncSession) -> AgentRepository:
    return AgentRepository(db_session)


# Service fixtures
@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def appointment_service(db_session: AsyncSession) -> AppointmentService:
    return AppointmentService(db_session)


@pytest.fixture
def agent_service(db_session: AsyncSession) -> AgentService:
    return AgentService(db_session)


# Test data factories
class UserFactory:
    """Factory for user payloads and rows."""

    @staticmethod
    def create_user_data(
        username: str = None,
        email: str = None,
        password: str = "testpassword123",
        full_name: str = "Test User",
        **overrides
    ) -> dict:
        """Client-shaped (camelCase) registration payload."""
        suffix = uuid.uuid4().hex[:8]
        data = {
            "username": username or f"user{suffix}",
            "email": email or f"test{suffix}@example.com",
            "password": password,
            "fullName": full_name,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_user(user_service: UserService, **kwargs) -> User:
        """Register a test user through the service."""
        return await user_service.register_user(UserFactory.create_user_data(**kwargs))


class PropertyFactory:
    """Factory for listing payloads and rows."""

    @staticmethod
    def create_property_data(user_id: int, **overrides) -> dict:
        """Client-shaped listing payload with loosely typed numbers."""
        data = {
            "title": "Test Property",
            "description": "A beautiful test property",
            "price": "1500.00",
            "address": "1 Test Street",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "lat": 39.7817,
            "lng": -89.6501,
            "bedrooms": 3,
            "bathrooms": "2",
            "squareFeet": 1400,
            "yearBuilt": 1995,
            "propertyType": "house",
            "listingType": "buy",
            "imageUrl": "https://images.example.com/test.jpg",
            "userId": user_id,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(property_service: PropertyService, user_id: int, **overrides) -> Property:
        """Create a test listing through the service."""
        return await property_service.create_property(
            PropertyFactory.create_property_data(user_id, **overrides)
        )


class AppointmentFactory:

    @staticmethod
    def create_appointment_data(property_id: int, user_id: int, **overrides) -> dict:
        date = datetime.now(timezone.utc) + timedelta(days=3)
        data = {
            "propertyId": property_id,
            "userId": user_id,
            "date": date.replace(microsecond=0).isoformat(),
            "message": "Is the garden south facing?",
        }
        data.update(overrides)
        return data


class AgentFactory:

    @staticmethod
    def create_agent_data(**overrides) -> dict:
        data = {
            "name": "Sarah Johnson",
            "specialization": "Luxury Homes",
            "rating": "4.9",
            "propertiesSold": 124,
            "imageUrl": "https://images.example.com/agent.jpg",
        }
        data.update(overrides)
        return data


# Common test fixtures
@pytest.fixture
async def test_user(user_service: UserService) -> User:
    """Create a test user with a known password."""
    return await UserFactory.create_user(
        user_service,
        username="owner",
        email="owner@test.com",
        full_name="Listing Owner"
    )


@pytest.fixture
async def other_user(user_service: UserService) -> User:
    """A second user who owns nothing."""
    return await UserFactory.create_user(
        user_service,
        username="visitor",
        email="visitor@test.com",
        full_name="Visitor"
    )


@pytest.fixture
async def test_property(property_service: PropertyService, test_user: User) -> Property:
    """Create a test listing owned by test_user."""
    return await PropertyFactory.create_property(property_service, test_user.id)


@pytest.fixture
async def test_appointment(
    appointment_service: AppointmentService,
    test_property: Property,
    other_user: User
) -> Appointment:
    return await appointment_service.schedule_appointment(
        AppointmentFactory.create_appointment_data(test_property.id, other_user.id)
    )


@pytest.fixture
async def test_agent(agent_service: AgentService) -> Agent:
    return await agent_service.create_agent(AgentFactory.create_agent_data())
