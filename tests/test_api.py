"""
Integration tests for all API endpoints.
Tests complete request/response cycles against an in-memory database.
"""

import pytest
from httpx import AsyncClient
from fastapi import status

from realty.models.property import Property
from realty.models.user import User
from tests.conftest import AgentFactory, AppointmentFactory, PropertyFactory, UserFactory


def _error(response) -> dict:
    body = response.json()
    assert set(body) == {"error"}
    assert "timestamp" in body["error"]
    return body["error"]


class TestUserEndpoints:
    """Integration tests for user endpoints."""

    @pytest.mark.asyncio
    async def test_register_user(self, async_client: AsyncClient):
        payload = UserFactory.create_user_data(username="jdoe", email="JDoe@Example.com")

        response = await async_client.post("/api/users", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "jdoe"
        assert data["email"] == "jdoe@example.com"
        assert data["fullName"] == "Test User"
        assert data["savedProperties"] == []
        assert isinstance(data["id"], int)
        assert "password" not in data
        assert "passwordHash" not in data

    @pytest.mark.asyncio
    async def test_register_ignores_client_id(self, async_client: AsyncClient):
        payload = UserFactory.create_user_data(id=999, createdAt="2001-01-01T00:00:00Z")

        response = await async_client.post("/api/users", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["id"] != 999

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post(
            "/api/users", json=UserFactory.create_user_data(username=test_user.username)
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        error = _error(response)
        assert error["code"] == "CONFLICT"
        assert "username" in error["message"]

    @pytest.mark.asyncio
    async def test_register_reports_every_missing_field(self, async_client: AsyncClient):
        response = await async_client.post("/api/users", json={"username": "solo", "email": "  "})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        error = _error(response)
        assert error["code"] == "VALIDATION_ERROR"
        details = {detail["field"]: detail["type"] for detail in error["details"]}
        assert details == {"email": "missing", "fullName": "missing", "password": "missing"}

    @pytest.mark.asyncio
    async def test_register_bad_saved_properties(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/users", json=UserFactory.create_user_data(savedProperties="1,two")
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        details = _error(response)["details"]
        assert details[0]["field"] == "savedProperties"
        assert details[0]["type"] == "shape_mismatch"

    @pytest.mark.asyncio
    async def test_login(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post(
            "/api/users/login", json={"username": "owner", "password": "testpassword123"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == test_user.id

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, async_client: AsyncClient, test_user: User):
        response = await async_client.post(
            "/api/users/login", json={"username": "owner", "password": "guess"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert _error(response)["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, async_client: AsyncClient):
        response = await async_client.get("/api/users/12345")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert _error(response)["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_saved_properties_flow(
        self, async_client: AsyncClient, other_user: User, test_property: Property
    ):
        url = f"/api/users/{other_user.id}/saved-properties/{test_property.id}"

        first = await async_client.put(url)
        second = await async_client.put(url)
        assert first.status_code == status.HTTP_200_OK
        assert second.json() == {"userId": other_user.id, "savedProperties": [test_property.id]}

        listed = await async_client.get(f"/api/users/{other_user.id}/saved-properties")
        assert [prop["id"] for prop in listed.json()] == [test_property.id]

        removed = await async_client.delete(url)
        assert removed.json()["savedProperties"] == []

    @pytest.mark.asyncio
    async def test_save_unknown_property(self, async_client: AsyncClient, other_user: User):
        response = await async_client.put(f"/api/users/{other_user.id}/saved-properties/999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unsave_deleted_listing(
        self, async_client: AsyncClient, test_user: User, other_user: User, test_property: Property
    ):
        property_id = test_property.id
        url = f"/api/users/{other_user.id}/saved-properties/{property_id}"
        await async_client.put(url)
        await async_client.delete(f"/api/properties/{property_id}", params={"userId": test_user.id})

        response = await async_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["savedProperties"] == []


class TestPropertyEndpoints:
    """Integration tests for property endpoints."""

    @pytest.mark.asyncio
    async def test_create_property_with_loose_numbers(self, async_client: AsyncClient, test_user: User):
        payload = PropertyFactory.create_property_data(
            test_user.id, price=250000.0, bedrooms="4", bathrooms=2.0, yearBuilt=""
        )

        response = await async_client.post("/api/properties", json=payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["price"] == "250000"
        assert data["bedrooms"] == 4
        assert data["bathrooms"] == 2
        assert data["yearBuilt"] is None
        assert data["status"] == "available"
        assert data["featured"] is False
        assert data["ratingCount"] == 0
        assert data["userId"] == test_user.id

    @pytest.mark.asyncio
    async def test_create_property_collects_errors(self, async_client: AsyncClient, test_user: User):
        payload = PropertyFactory.create_property_data(test_user.id, price="abc", squareFeet="")
        del payload["title"]

        response = await async_client.post("/api/properties", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        details = {detail["field"]: detail["type"] for detail in _error(response)["details"]}
        assert details == {"title": "missing", "price": "shape_mismatch", "squareFeet": "missing"}

    @pytest.mark.asyncio
    async def test_create_property_unknown_owner(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/properties", json=PropertyFactory.create_property_data(user_id=4242)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_property(self, async_client: AsyncClient, test_property: Property):
        response = await async_client.get(f"/api/properties/{test_property.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == test_property.title
        assert data["price"] == "1500"
        assert data["zipCode"] == "62701"

    @pytest.mark.asyncio
    async def test_decimals_read_back_exactly(self, async_client: AsyncClient, test_user: User):
        payload = PropertyFactory.create_property_data(
            test_user.id, price="250000.555", lat="34.1478", lng="-118.123456789"
        )
        created = await async_client.post("/api/properties", json=payload)
        assert created.status_code == status.HTTP_201_CREATED

        response = await async_client.get(f"/api/properties/{created.json()['id']}")

        data = response.json()
        assert data["price"] == "250000.555"
        assert data["lat"] == "34.1478"
        assert data["lng"] == "-118.123456789"

    @pytest.mark.asyncio
    async def test_create_property_square_feet_out_of_range(self, async_client: AsyncClient, test_user: User):
        payload = PropertyFactory.create_property_data(test_user.id, squareFeet=3_000_000_000)

        response = await async_client.post("/api/properties", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["field"] == "squareFeet"
        assert _error(response)["details"][0]["type"] == "shape_mismatch"

    @pytest.mark.asyncio
    async def test_property_id_out_of_range(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties/3000000000")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["type"] == "shape_mismatch"

    @pytest.mark.asyncio
    async def test_search_bound_out_of_range(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties", params={"minSqft": "3000000000"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["field"] == "minSqft"

    @pytest.mark.asyncio
    async def test_search_properties(self, async_client: AsyncClient, test_user: User, property_service):
        await PropertyFactory.create_property(property_service, test_user.id, city="Austin", price="900")
        await PropertyFactory.create_property(property_service, test_user.id, city="Austin", price="3000")
        await PropertyFactory.create_property(property_service, test_user.id, city="Boston", price="900")

        response = await async_client.get(
            "/api/properties", params={"city": "austin", "maxPrice": "1000", "minYear": ""}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["properties"][0]["city"] == "Austin"
        assert data["properties"][0]["price"] == "900"
        assert data["page"] == 1
        assert data["hasNext"] is False

    @pytest.mark.asyncio
    async def test_search_pagination(self, async_client: AsyncClient, test_user: User, property_service):
        for index in range(3):
            await PropertyFactory.create_property(property_service, test_user.id, title=f"Listing {index}")

        response = await async_client.get("/api/properties", params={"page": 1, "pageSize": 2})

        data = response.json()
        assert data["total"] == 3
        assert data["totalPages"] == 2
        assert data["pageSize"] == 2
        assert len(data["properties"]) == 2
        assert data["hasNext"] is True

    @pytest.mark.asyncio
    async def test_search_rejects_unknown_parameter(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties", params={"pool": "yes"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["field"] == "pool"

    @pytest.mark.asyncio
    async def test_search_rejects_unparseable_bound(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties", params={"minPrice": "cheap"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        error = _error(response)
        assert error["details"] == [
            {"field": "minPrice", "type": "shape_mismatch", "message": error["details"][0]["message"]}
        ]

    @pytest.mark.asyncio
    async def test_page_size_limit(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties", params={"pageSize": 1000})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["field"] == "pageSize"

    @pytest.mark.asyncio
    async def test_featured(self, async_client: AsyncClient, test_user: User, property_service):
        await PropertyFactory.create_property(property_service, test_user.id, title="Spotlight", featured=True)
        await PropertyFactory.create_property(
            property_service, test_user.id, title="Gone", featured=True, status="sold"
        )

        response = await async_client.get("/api/properties/featured")

        assert response.status_code == status.HTTP_200_OK
        assert [prop["title"] for prop in response.json()] == ["Spotlight"]

    @pytest.mark.asyncio
    async def test_update_status(self, async_client: AsyncClient, test_user: User, test_property: Property):
        response = await async_client.patch(
            f"/api/properties/{test_property.id}/status",
            json={"status": "RENTED", "userId": test_user.id}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "rented"

    @pytest.mark.asyncio
    async def test_update_status_not_owner(
        self, async_client: AsyncClient, other_user: User, test_property: Property
    ):
        response = await async_client.patch(
            f"/api/properties/{test_property.id}/status",
            json={"status": "sold", "userId": other_user.id}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert _error(response)["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_rate_property(self, async_client: AsyncClient, test_property: Property):
        await async_client.post(f"/api/properties/{test_property.id}/ratings", json={"rating": 5})
        response = await async_client.post(f"/api/properties/{test_property.id}/ratings", json={"rating": "2"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["ratingCount"] == 2
        assert data["avgRating"] == "3.5"

    @pytest.mark.asyncio
    async def test_rate_property_out_of_range(self, async_client: AsyncClient, test_property: Property):
        response = await async_client.post(f"/api/properties/{test_property.id}/ratings", json={"rating": 9})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_delete_property(self, async_client: AsyncClient, test_user: User, test_property: Property):
        denied = await async_client.delete(
            f"/api/properties/{test_property.id}", params={"userId": test_user.id + 1000}
        )
        assert denied.status_code == status.HTTP_403_FORBIDDEN

        response = await async_client.delete(
            f"/api/properties/{test_property.id}", params={"userId": test_user.id}
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT

        missing = await async_client.get(f"/api/properties/{test_property.id}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND


class TestAppointmentEndpoints:
    """Integration tests for appointment endpoints."""

    @pytest.mark.asyncio
    async def test_schedule_and_list(
        self, async_client: AsyncClient, test_property: Property, other_user: User
    ):
        payload = AppointmentFactory.create_appointment_data(
            test_property.id, str(other_user.id), date="2030-06-01T14:30:00Z"
        )

        created = await async_client.post("/api/appointments", json=payload)
        assert created.status_code == status.HTTP_201_CREATED
        data = created.json()
        assert data["status"] == "pending"
        assert data["userId"] == other_user.id
        assert data["date"].startswith("2030-06-01T14:30:00")

        by_property = await async_client.get("/api/appointments", params={"propertyId": test_property.id})
        by_user = await async_client.get("/api/appointments", params={"userId": other_user.id})
        assert [a["id"] for a in by_property.json()] == [data["id"]]
        assert [a["id"] for a in by_user.json()] == [data["id"]]

    @pytest.mark.asyncio
    async def test_schedule_bad_date(self, async_client: AsyncClient, test_property: Property, other_user: User):
        payload = AppointmentFactory.create_appointment_data(test_property.id, other_user.id, date="next tuesday")

        response = await async_client.post("/api/appointments", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert _error(response)["details"][0]["field"] == "date"

    @pytest.mark.asyncio
    async def test_list_requires_one_filter(self, async_client: AsyncClient):
        neither = await async_client.get("/api/appointments")
        both = await async_client.get("/api/appointments", params={"userId": 1, "propertyId": 1})

        assert neither.status_code == status.HTTP_400_BAD_REQUEST
        assert both.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_status_transitions(self, async_client: AsyncClient, test_appointment):
        url = f"/api/appointments/{test_appointment.id}/status"

        confirmed = await async_client.patch(url, json={"status": "confirmed"})
        assert confirmed.status_code == status.HTTP_200_OK
        assert confirmed.json()["status"] == "confirmed"

        back = await async_client.patch(url, json={"status": "pending"})
        assert back.status_code == status.HTTP_400_BAD_REQUEST
        assert _error(back)["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_unknown_status(self, async_client: AsyncClient, test_appointment):
        response = await async_client.patch(
            f"/api/appointments/{test_appointment.id}/status", json={"status": "maybe"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestAgentEndpoints:

    @pytest.mark.asyncio
    async def test_create_and_list_agents(self, async_client: AsyncClient):
        low = await async_client.post("/api/agents", json=AgentFactory.create_agent_data(name="Low", rating=3.5))
        high = await async_client.post("/api/agents", json=AgentFactory.create_agent_data(name="High"))
        assert low.status_code == status.HTTP_201_CREATED
        assert high.json()["propertiesSold"] == 124

        response = await async_client.get("/api/agents")

        assert [agent["name"] for agent in response.json()] == ["High", "Low"]
        assert response.json()[0]["rating"] == "4.9"

    @pytest.mark.asyncio
    async def test_get_agent(self, async_client: AsyncClient, test_agent):
        found = await async_client.get(f"/api/agents/{test_agent.id}")
        missing = await async_client.get("/api/agents/999")

        assert found.json()["name"] == "Sarah Johnson"
        assert missing.status_code == status.HTTP_404_NOT_FOUND


class TestApplicationEndpoints:

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["api_prefix"] == "/api"

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, async_client: AsyncClient):
        response = await async_client.get("/api/nowhere")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert _error(response)["code"] == "HTTP_404"
