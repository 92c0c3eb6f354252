"""
Tests for repository classes against a real database session.
Tests CRUD operations, uniqueness checks and property search.
"""

import pytest
from sqlalchemy import update
from decimal import Decimal

from realty.models.enums import PropertyStatus
from realty.models.user import User
from realty.repositories.agent import AgentRepository
from realty.repositories.property import PropertyRepository, PropertySearchCriteria
from realty.repositories.user import UserRepository
from realty.services.property import PropertyService
from realty.schemas.filters import PropertyFilter
from realty.utils.exceptions import DuplicateResourceError
from tests.conftest import PropertyFactory


def _criteria(**filters) -> PropertySearchCriteria:
    return PropertySearchCriteria.from_filter(PropertyFilter(**filters))


class TestBaseRepository:

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, user_repository: UserRepository):
        assert await user_repository.get_by_id(404) is None

    @pytest.mark.asyncio
    async def test_update_and_count(self, property_repository: PropertyRepository, test_property):
        updated = await property_repository.update(test_property.id, {"featured": True})

        assert updated.featured is True
        assert await property_repository.count({"featured": True}) == 1

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, property_repository: PropertyRepository):
        assert await property_repository.update(999, {"featured": True}) is None

    @pytest.mark.asyncio
    async def test_delete(self, property_repository: PropertyRepository, test_property):
        assert await property_repository.delete(test_property.id) is True
        assert await property_repository.exists(test_property.id) is False
        assert await property_repository.delete(test_property.id) is False


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, user_repository: UserRepository):
        user = await user_repository.create_user({
            "username": "alice",
            "email": "alice@example.com",
            "full_name": "Alice",
            "password": "s3cret-pass",
            "saved_properties": [],
        })

        assert user.id is not None
        assert user.password_hash != "s3cret-pass"
        assert user.verify_password("s3cret-pass")
        assert user.saved_properties == []
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_username(self, user_repository: UserRepository, test_user):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await user_repository.create_user({
                "username": test_user.username,
                "email": "different@example.com",
                "full_name": "Other",
                "password": "password1",
            })
        assert exc_info.value.field == "username"
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, user_repository: UserRepository, test_user):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await user_repository.create_user({
                "username": "someone-else",
                "email": test_user.email.upper(),
                "full_name": "Other",
                "password": "password1",
            })
        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_authenticate_user(self, user_repository: UserRepository, test_user):
        assert (await user_repository.authenticate_user("owner", "testpassword123")).id == test_user.id
        assert await user_repository.authenticate_user("owner", "wrong") is None
        assert await user_repository.authenticate_user("nobody", "testpassword123") is None

    @pytest.mark.asyncio
    async def test_get_by_email_normalizes(self, user_repository: UserRepository, test_user):
        found = await user_repository.get_by_email("  OWNER@test.com ")
        assert found.id == test_user.id

    @pytest.mark.asyncio
    async def test_set_saved_properties_dedupes(self, user_repository: UserRepository, test_user):
        updated = await user_repository.set_saved_properties(test_user.id, [5, 2, 5, 9])
        assert updated.saved_properties == [5, 2, 9]

    @pytest.mark.asyncio
    async def test_get_for_update_rereads_row(self, user_repository: UserRepository, test_user):
        loaded = await user_repository.get_by_id(test_user.id)
        assert loaded.saved_properties == []

        await user_repository.db.execute(
            update(User)
            .where(User.id == test_user.id)
            .values(saved_properties=[7])
            .execution_options(synchronize_session=False)
        )

        locked = await user_repository.get_for_update(test_user.id)
        assert locked is loaded
        assert locked.saved_properties == [7]

    @pytest.mark.asyncio
    async def test_get_for_update_missing(self, user_repository: UserRepository):
        assert await user_repository.get_for_update(999) is None


class TestPropertyRepository:

    @pytest.fixture
    async def listings(self, property_service: PropertyService, test_user):
        """Five listings spread over price, size, age and type."""
        specs = [
            dict(title="Austin Bungalow", city="Austin", price="250000", bedrooms=3, bathrooms=2,
                 squareFeet=1500, yearBuilt=1995, propertyType="House", listingType="buy"),
            dict(title="Austin Loft", city="austin", price="1800", bedrooms=1, bathrooms=1,
                 squareFeet=700, yearBuilt="", propertyType="apartment", listingType="rent"),
            dict(title="Dallas Ranch", city="Dallas", price="480000.50", bedrooms=4, bathrooms=3,
                 squareFeet=2600, yearBuilt=2010, propertyType="house", listingType="buy"),
            dict(title="Round Rock Condo", city="Round Rock", price="2200", bedrooms=2, bathrooms=2,
                 squareFeet=1000, yearBuilt=2018, propertyType="condo", listingType="rent", featured=True),
            dict(title="West Austin Estate", city="West Austin", price="1250000", bedrooms=5, bathrooms=4,
                 squareFeet=4200, yearBuilt=1980, propertyType="house", listingType="buy", featured=True,
                 status="sold"),
        ]
        return [
            await PropertyFactory.create_property(property_service, test_user.id, **spec)
            for spec in specs
        ]

    async def _titles(self, repository: PropertyRepository, **filters):
        properties, total = await repository.search_properties(_criteria(**filters))
        assert total == len(properties)
        return {prop.title for prop in properties}

    @pytest.mark.asyncio
    async def test_no_filter_returns_everything(self, property_repository, listings):
        assert len(await self._titles(property_repository)) == 5

    @pytest.mark.asyncio
    async def test_city_is_case_insensitive_substring(self, property_repository, listings):
        titles = await self._titles(property_repository, city="AUSTIN")
        assert titles == {"Austin Bungalow", "Austin Loft", "West Austin Estate"}

    @pytest.mark.asyncio
    async def test_price_range_uses_decimal_comparison(self, property_repository, listings):
        titles = await self._titles(property_repository, min_price="2000", max_price="480000.50")
        assert titles == {"Austin Bungalow", "Dallas Ranch", "Round Rock Condo"}

    @pytest.mark.asyncio
    async def test_min_beds_and_baths_are_lower_bounds(self, property_repository, listings):
        titles = await self._titles(property_repository, min_beds="3", min_baths="3")
        assert titles == {"Dallas Ranch", "West Austin Estate"}

    @pytest.mark.asyncio
    async def test_property_type_case_insensitive(self, property_repository, listings):
        titles = await self._titles(property_repository, property_type="HOUSE")
        assert titles == {"Austin Bungalow", "Dallas Ranch", "West Austin Estate"}

    @pytest.mark.asyncio
    async def test_listing_type(self, property_repository, listings):
        titles = await self._titles(property_repository, listing_type="rent")
        assert titles == {"Austin Loft", "Round Rock Condo"}

    @pytest.mark.asyncio
    async def test_square_feet_range(self, property_repository, listings):
        titles = await self._titles(property_repository, min_sqft="1000", max_sqft="2600")
        assert titles == {"Austin Bungalow", "Dallas Ranch", "Round Rock Condo"}

    @pytest.mark.asyncio
    async def test_year_bounds_exclude_unknown_year(self, property_repository, listings):
        titles = await self._titles(property_repository, max_year="2020")
        assert "Austin Loft" not in titles
        assert len(titles) == 4

        titles = await self._titles(property_repository, min_year="2000", max_year="2015")
        assert titles == {"Dallas Ranch"}

    @pytest.mark.asyncio
    async def test_absent_bound_is_not_zero(self, property_repository, listings):
        """Only the given bound applies; the missing minimum adds no condition."""
        titles = await self._titles(property_repository, max_price="2000")
        assert titles == {"Austin Loft"}

    @pytest.mark.asyncio
    async def test_pagination(self, property_repository, listings):
        first_page, total = await property_repository.search_properties(_criteria(), skip=0, limit=2)
        second_page, _ = await property_repository.search_properties(_criteria(), skip=2, limit=2)

        assert total == 5
        assert len(first_page) == 2
        assert len(second_page) == 2
        assert not {p.id for p in first_page} & {p.id for p in second_page}

    @pytest.mark.asyncio
    async def test_featured_listed_first(self, property_repository, listings):
        properties, _ = await property_repository.search_properties(_criteria())
        assert all(prop.featured for prop in properties[:2])

    @pytest.mark.asyncio
    async def test_get_featured_only_available(self, property_repository, listings):
        featured = await property_repository.get_featured(limit=10)
        assert [prop.title for prop in featured] == ["Round Rock Condo"]

    @pytest.mark.asyncio
    async def test_get_by_ids_keeps_order(self, property_repository, listings):
        ids = [listings[3].id, 999, listings[0].id]
        found = await property_repository.get_by_ids(ids)
        assert [prop.id for prop in found] == [listings[3].id, listings[0].id]

    @pytest.mark.asyncio
    async def test_decimal_columns_round_trip(self, property_repository, listings):
        ranch = await property_repository.get_by_id(listings[2].id)
        assert ranch.price == Decimal("480000.50")
        assert ranch.year_built == 2010
        assert listings[1].year_built is None

    @pytest.mark.asyncio
    async def test_add_rating(self, property_repository, listings):
        await property_repository.add_rating(listings[0].id, 5)
        rated = await property_repository.add_rating(listings[0].id, 2)

        assert rated.rating_count == 2
        assert Decimal(rated.avg_rating) == Decimal("3.50")

    @pytest.mark.asyncio
    async def test_add_rating_missing_property(self, property_repository):
        assert await property_repository.add_rating(12345, 3) is None

    @pytest.mark.asyncio
    async def test_status_stored_as_enum(self, property_repository, listings):
        estate = await property_repository.get_by_id(listings[4].id)
        assert estate.status == PropertyStatus.SOLD


class TestAgentRepository:

    @pytest.mark.asyncio
    async def test_top_rated_order(self, agent_repository: AgentRepository):
        for name, rating in (("B", Decimal("4.20")), ("A", Decimal("4.90")), ("C", Decimal("3.10"))):
            await agent_repository.create({
                "name": name,
                "specialization": "Condos",
                "rating": rating,
                "properties_sold": 10,
                "image_url": "https://images.example.com/a.jpg",
            })

        agents = await agent_repository.get_top_rated()
        assert [agent.name for agent in agents] == ["A", "B", "C"]
