"""Integration tests for API endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from tourmarket.core.database import get_db

API = "/api/v1"


@pytest.mark.asyncio
async def test_create_booking_endpoint(test_client, sample_booking_data):
    """Test the booking creation endpoint and its wire names."""
    response = await test_client.post(f"{API}/bookings", json=sample_booking_data)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Booking created successfully"
    data = body["data"]
    assert data["paymentMethod"] == "card"
    assert data["idTransaccion"] == "tx-1001"
    assert data["status"] == "in-process"
    assert data["tickets"] == 2
    assert Decimal(data["total"]) == Decimal("200")
    assert "id" in data


@pytest.mark.asyncio
async def test_create_booking_drops_unknown_fields(test_client, sample_booking_data):
    """Test fields outside the booking schema never reach the database."""
    payload = {**sample_booking_data, "status_code": 999, "is_admin": True}

    response = await test_client.post(f"{API}/bookings", json=payload)

    assert response.status_code == 201
    assert "is_admin" not in response.json()["data"]


@pytest.mark.asyncio
async def test_create_booking_missing_fields(test_client):
    """Test missing required fields map to 400 Problem Details."""
    response = await test_client.post(f"{API}/bookings", json={"tickets": 1})

    assert response.status_code == 400
    data = response.json()
    assert data["status"] == 400
    assert data["title"] == "Validation Error"
    assert data["errors"]["missing_fields"] == ["user_id", "product_id", "paymentMethod", "idTransaccion"]
    assert data["instance"] == f"{API}/bookings"


@pytest.mark.asyncio
async def test_create_booking_invalid_shape(test_client, sample_booking_data):
    """Test schema violations are reported as 422 with violations."""
    response = await test_client.post(f"{API}/bookings", json={**sample_booking_data, "tickets": 0})

    assert response.status_code == 422
    data = response.json()
    assert data["status"] == 422
    assert any(violation["path"].endswith("tickets") for violation in data["violations"])


@pytest.mark.asyncio
async def test_get_booking_endpoint(test_client, sample_booking_data, sample_tour_date):
    """Test the booking detail view."""
    created = await test_client.post(
        f"{API}/bookings", json={**sample_booking_data, "tour_date_id": str(sample_tour_date.id)}
    )
    booking_id = created.json()["data"]["id"]

    response = await test_client.get(f"{API}/bookings/{booking_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["booking_id"] == booking_id
    assert data["name"] == "Ana Pérez"
    assert data["product"] == "Quebrada de Humahuaca"
    assert data["selected_date"] == "lunes, 15 de diciembre de 2025 9:00"


@pytest.mark.asyncio
async def test_get_booking_not_found_returns_null(test_client):
    """Test an unknown booking is a 200 with a null body."""
    response = await test_client.get(f"{API}/bookings/{uuid4()}")

    assert response.status_code == 200
    assert response.json() is None


@pytest.mark.asyncio
async def test_get_booking_malformed_id(test_client):
    """Test a malformed booking ID maps to 400."""
    response = await test_client.get(f"{API}/bookings/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["errors"]["invalid_fields"] == {"booking ID": "not-a-uuid"}


@pytest.mark.asyncio
async def test_booking_listings(test_client, sample_booking_data, sample_product):
    """Test the global, per-user and per-product listings."""
    await test_client.post(f"{API}/bookings", json=sample_booking_data)

    everything = await test_client.get(f"{API}/bookings")
    by_user = await test_client.get(f"{API}/bookings/user/{sample_booking_data['user_id']}")
    by_product = await test_client.get(f"{API}/bookings/product/{sample_product.id}")
    nobody = await test_client.get(f"{API}/bookings/user/auth0|nobody")

    assert len(everything.json()) == 1
    assert len(by_user.json()) == 1
    assert len(by_product.json()) == 1
    assert nobody.status_code == 200
    assert nobody.json() == []


@pytest.mark.asyncio
async def test_update_and_delete_booking(test_client, sample_booking_data):
    """Test the update and delete envelopes."""
    created = await test_client.post(f"{API}/bookings", json=sample_booking_data)
    booking_id = created.json()["data"]["id"]

    updated = await test_client.put(f"{API}/bookings/{booking_id}", json={"tickets": 4, "paymentMethod": "cash"})
    deleted = await test_client.delete(f"{API}/bookings/{booking_id}")
    missing = await test_client.delete(f"{API}/bookings/{booking_id}")

    assert updated.status_code == 200
    assert updated.json()["data"]["tickets"] == 4
    assert updated.json()["data"]["paymentMethod"] == "cash"
    assert deleted.status_code == 200
    assert deleted.json()["data"]["id"] == booking_id
    assert missing.status_code == 404
    assert missing.json()["resource_type"] == "booking"


@pytest.mark.asyncio
async def test_update_booking_not_found(test_client):
    """Test updating an unknown booking maps to 404."""
    response = await test_client.put(f"{API}/bookings/{uuid4()}", json={"tickets": 2})

    assert response.status_code == 404
    assert response.json()["title"] == "Resource Not Found"


@pytest.mark.asyncio
async def test_update_status_by_transaction(test_client, sample_booking_data):
    """Test payment notifications update the booking status."""
    await test_client.post(f"{API}/bookings", json=sample_booking_data)

    response = await test_client.put(f"{API}/bookings/transaction/tx-1001/status", json={"status": "completed"})

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "completed"


@pytest.mark.asyncio
async def test_update_status_unknown_transaction(test_client):
    """Test notifications for unknown transactions are acknowledged with null data."""
    response = await test_client.put(f"{API}/bookings/transaction/tx-unknown/status", json={"status": "canceled"})

    assert response.status_code == 200
    assert response.json()["data"] is None


@pytest.mark.asyncio
async def test_update_status_blank_transaction(test_client):
    """Test a whitespace transaction ID maps to 400."""
    response = await test_client.put(f"{API}/bookings/transaction/%20%20/status", json={"status": "completed"})

    assert response.status_code == 400
    assert response.json()["title"] == "Validation Error"


@pytest.mark.asyncio
async def test_storage_failure_maps_to_500(test_app, test_client):
    """Test storage failures map to a 500 without leaking driver details."""
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("password authentication failed"))

    async def failing_db():
        yield session

    test_app.dependency_overrides[get_db] = failing_db

    response = await test_client.get(f"{API}/bookings")

    assert response.status_code == 500
    data = response.json()
    assert data["title"] == "Storage Error"
    assert data["detail"] == "Error fetching the bookings."
    assert "error_id" in data
    assert "password" not in response.text


@pytest.mark.asyncio
async def test_create_tour_product_endpoint(test_client, sample_tour_data):
    """Test creating a Tour product and reading its tour back."""
    response = await test_client.post(f"{API}/products", json=sample_tour_data)

    assert response.status_code == 201
    product = response.json()["data"]
    assert product["name"] == "Glaciar Perito Moreno"
    assert product["is_approved"] is False

    tour = await test_client.get(f"{API}/products/{product['id']}/tour")
    dates = await test_client.get(f"{API}/products/{product['id']}/tour/dates")

    assert tour.status_code == 200
    assert tour.json()["departure_point"] == "El Calafate"
    assert len(tour.json()["amenity_ids"]) == 2
    assert len(dates.json()) == 2


@pytest.mark.asyncio
async def test_create_tour_product_invalid_date(test_client, sample_tour_data):
    """Test an invalid date maps to 400 and stores no product."""
    response = await test_client.post(
        f"{API}/products", json={**sample_tour_data, "available_dates": ["tomorrow"]}
    )
    products = await test_client.get(f"{API}/products")

    assert response.status_code == 400
    assert response.json()["detail"] == "The date 'tomorrow' is not valid."
    assert products.json() == []


@pytest.mark.asyncio
async def test_product_listing_and_approval(test_client, sample_product):
    """Test searching, approving and filtering products."""
    product_id = str(sample_product.id)

    search = await test_client.get(f"{API}/products", params={"search": "QUEBRADA"})
    approve = await test_client.put(f"{API}/products/{product_id}/approve", json={"is_approved": True})
    approved = await test_client.get(f"{API}/products", params={"approved": "true"})

    assert [item["id"] for item in search.json()] == [product_id]
    assert approve.status_code == 200
    assert approve.json()["data"]["is_approved"] is True
    assert [item["id"] for item in approved.json()] == [product_id]


@pytest.mark.asyncio
async def test_product_without_tour(test_client, sample_product_data):
    """Test the tour view of a plain product is a 404."""
    created = await test_client.post(f"{API}/products", json=sample_product_data)

    response = await test_client.get(f"{API}/products/{created.json()['data']['id']}/tour")

    assert created.status_code == 201
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_user_endpoints(test_client):
    """Test registering and reading users."""
    created = await test_client.post(
        f"{API}/users", json={"id": "auth0|new", "email": "nora@tourmarket.io", "first_name": "Nora"}
    )
    fetched = await test_client.get(f"{API}/users/auth0|new")
    missing = await test_client.get(f"{API}/users/auth0|ghost")

    assert created.status_code == 201
    assert created.json()["message"] == "User created successfully"
    assert fetched.json()["email"] == "nora@tourmarket.io"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_catalog_endpoints(test_client):
    """Test the catalog routers share one CRUD shape."""
    created = await test_client.post(f"{API}/product-amenities", json={"name": "Wi-Fi", "icon": "wifi"})
    entry_id = created.json()["data"]["id"]

    listing = await test_client.get(f"{API}/product-amenities")
    updated = await test_client.put(f"{API}/product-amenities/{entry_id}", json={"description": "On board"})
    missing_name = await test_client.post(f"{API}/roles", json={"description": "No name"})

    assert created.status_code == 201
    assert created.json()["message"] == "Product amenity created successfully"
    assert [item["name"] for item in listing.json()] == ["Wi-Fi"]
    assert updated.json()["data"]["description"] == "On board"
    assert missing_name.status_code == 400


@pytest.mark.asyncio
async def test_rating_average_endpoint(test_client, sample_user, sample_product):
    """Test the per-product rating average."""
    for value in (3, 4):
        response = await test_client.post(
            f"{API}/ratings",
            json={"user_id": sample_user.id, "product_id": str(sample_product.id), "rating": value}
        )
        assert response.status_code == 201

    response = await test_client.get(f"{API}/ratings/product/{sample_product.id}/average")

    assert response.status_code == 200
    assert response.json()["average"] == 3.5
    assert response.json()["count"] == 2


@pytest.mark.asyncio
async def test_faq_endpoints(test_client, sample_product):
    """Test FAQs can be created and listed per product."""
    created = await test_client.post(
        f"{API}/faqs",
        json={"product_id": str(sample_product.id), "question": "Pets?", "answer": "Not allowed"}
    )
    listing = await test_client.get(f"{API}/faqs/product/{sample_product.id}")

    assert created.status_code == 201
    assert [item["question"] for item in listing.json()] == ["Pets?"]
