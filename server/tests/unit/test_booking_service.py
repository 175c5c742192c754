"""Unit tests for booking service."""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from tourmarket.core.exceptions import NotFoundError, StorageError, ValidationError
from tourmarket.models.booking import Booking, BookingStatus
from tourmarket.schemas.booking import CreateBookingRequest, UpdateBookingRequest
from tourmarket.services.booking_service import BookingService


async def _create(service, data, **overrides):
    return await service.create_booking(CreateBookingRequest.model_validate({**data, **overrides}))


@pytest.mark.asyncio
async def test_create_booking(test_session, sample_booking_data, sample_tour_date):
    """Test creating a booking with a tour date."""
    service = BookingService(test_session)

    booking = await _create(service, sample_booking_data, tour_date_id=str(sample_tour_date.id))

    assert booking.id is not None
    assert booking.user_id == sample_booking_data["user_id"]
    assert str(booking.product_id) == sample_booking_data["product_id"]
    assert booking.tour_date_id == sample_tour_date.id
    assert booking.tickets == 2
    assert booking.payment_method == "card"
    assert booking.transaction_id == "tx-1001"
    assert booking.status == BookingStatus.IN_PROCESS


@pytest.mark.asyncio
async def test_create_booking_computes_missing_total(test_session, sample_booking_data):
    """Test the total defaults to product price times tickets."""
    booking = await _create(BookingService(test_session), sample_booking_data)

    assert booking.total == Decimal("200.00")


@pytest.mark.asyncio
async def test_create_booking_keeps_given_total(test_session, sample_booking_data):
    """Test an explicit total is stored as given."""
    booking = await _create(BookingService(test_session), sample_booking_data, total="150.50")

    assert booking.total == Decimal("150.50")


@pytest.mark.asyncio
async def test_create_booking_defaults_to_one_ticket(test_session, sample_booking_data):
    """Test tickets default to 1."""
    data = {key: value for key, value in sample_booking_data.items() if key != "tickets"}

    booking = await _create(BookingService(test_session), data)

    assert booking.tickets == 1
    assert booking.total == Decimal("100.00")


@pytest.mark.asyncio
async def test_create_booking_missing_fields(test_session):
    """Test every missing required field is named in order."""
    service = BookingService(test_session)

    with pytest.raises(ValidationError) as exc_info:
        await _create(service, {"user_id": "someone"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.extensions["errors"]["missing_fields"] == [
        "product_id", "paymentMethod", "idTransaccion"
    ]
    assert str(exc_info.value) == "The fields product_id, paymentMethod, idTransaccion are required."

    result = await test_session.execute(select(Booking))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_create_booking_unknown_product(test_session, sample_booking_data):
    """Test computing a total for a missing product raises NotFoundError."""
    with pytest.raises(NotFoundError):
        await _create(BookingService(test_session), sample_booking_data, product_id=str(uuid4()))


@pytest.mark.asyncio
async def test_create_booking_unknown_user_is_storage_error(test_session, sample_booking_data):
    """Test a foreign key violation surfaces as a StorageError."""
    with pytest.raises(StorageError) as exc_info:
        await _create(BookingService(test_session), sample_booking_data, user_id="nobody")

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "Error creating the booking."


@pytest.mark.asyncio
async def test_get_booking_detail(test_session, sample_booking_data, sample_tour_date):
    """Test the detail view joins user, product and a localized date."""
    service = BookingService(test_session, locale="es")
    booking = await _create(service, sample_booking_data, tour_date_id=str(sample_tour_date.id))

    detail = await service.get_booking_detail(booking.id)

    assert detail is not None
    assert detail.booking_id == booking.id
    assert detail.name == "Ana Pérez"
    assert detail.product == "Quebrada de Humahuaca"
    assert detail.tickets == 2
    assert detail.total == Decimal("200.00")
    assert detail.selected_date == "lunes, 15 de diciembre de 2025 9:00"


@pytest.mark.asyncio
async def test_get_booking_detail_without_tour_date(test_session, sample_booking_data):
    """Test a booking without a tour date has no selected date."""
    service = BookingService(test_session)
    booking = await _create(service, sample_booking_data)

    detail = await service.get_booking_detail(str(booking.id))

    assert detail.selected_date is None


@pytest.mark.asyncio
async def test_get_booking_detail_not_found(test_session):
    """Test getting a non-existent booking returns None."""
    assert await BookingService(test_session).get_booking_detail(uuid4()) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("booking_id", ["", "   ", "not-a-uuid"])
async def test_get_booking_detail_invalid_id(test_session, booking_id):
    """Test empty or malformed identifiers are validation errors."""
    with pytest.raises(ValidationError):
        await BookingService(test_session).get_booking_detail(booking_id)


@pytest.mark.asyncio
async def test_list_bookings(test_session, sample_booking_data):
    """Test listing returns every booking oldest first."""
    service = BookingService(test_session)
    first = await _create(service, sample_booking_data)
    second = await _create(service, sample_booking_data, idTransaccion="tx-1002")

    bookings = await service.list_bookings()

    assert {booking.id for booking in bookings} == {first.id, second.id}


@pytest.mark.asyncio
async def test_list_bookings_for_user_and_product(test_session, sample_booking_data, sample_product):
    """Test filtering by user and by product."""
    service = BookingService(test_session)
    booking = await _create(service, sample_booking_data)

    by_user = await service.list_bookings_for_user(sample_booking_data["user_id"])
    by_product = await service.list_bookings_for_product(sample_product.id)

    assert [item.id for item in by_user] == [booking.id]
    assert [item.id for item in by_product] == [booking.id]


@pytest.mark.asyncio
async def test_list_bookings_empty(test_session):
    """Test listing for a user or product without bookings returns an empty list."""
    service = BookingService(test_session)

    assert await service.list_bookings_for_user("auth0|nobody") == []
    assert await service.list_bookings_for_product(uuid4()) == []


@pytest.mark.asyncio
async def test_list_bookings_for_user_requires_id(test_session):
    """Test an empty user ID is rejected."""
    with pytest.raises(ValidationError):
        await BookingService(test_session).list_bookings_for_user("")


@pytest.mark.asyncio
async def test_update_booking(test_session, sample_booking_data, sample_tour_date):
    """Test a partial update only touches the given fields."""
    service = BookingService(test_session)
    booking = await _create(service, sample_booking_data)

    updated = await service.update_booking(
        booking.id,
        UpdateBookingRequest.model_validate({"tickets": 3, "tour_date_id": str(sample_tour_date.id)})
    )

    assert updated.tickets == 3
    assert updated.tour_date_id == sample_tour_date.id
    assert updated.payment_method == "card"
    assert updated.total == Decimal("200.00")


@pytest.mark.asyncio
async def test_update_booking_not_found(test_session):
    """Test updating a non-existent booking raises NotFoundError."""
    with pytest.raises(NotFoundError) as exc_info:
        await BookingService(test_session).update_booking(uuid4(), UpdateBookingRequest(tickets=2))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_update_status_by_transaction(test_session, sample_booking_data):
    """Test every booking paid with the transaction gets the new status."""
    service = BookingService(test_session)
    first = await _create(service, sample_booking_data)
    second = await _create(service, sample_booking_data)

    updated = await service.update_status_by_transaction("tx-1001", "completed")

    assert updated is not None
    assert updated.status == BookingStatus.COMPLETED
    assert {first.status, second.status} == {BookingStatus.COMPLETED}


@pytest.mark.asyncio
async def test_update_status_unknown_transaction(test_session):
    """Test an unknown transaction is a silent no-op."""
    assert await BookingService(test_session).update_status_by_transaction("tx-missing", "canceled") is None


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(test_session, sample_booking_data):
    """Test statuses outside the enumeration are rejected."""
    service = BookingService(test_session)
    await _create(service, sample_booking_data)

    with pytest.raises(ValidationError) as exc_info:
        await service.update_status_by_transaction("tx-1001", "refunded")

    assert exc_info.value.extensions["errors"]["allowed_statuses"] == ["completed", "in-process", "canceled"]


@pytest.mark.asyncio
async def test_delete_booking(test_session, sample_booking_data):
    """Test deleting returns the booking and removes it."""
    service = BookingService(test_session)
    booking = await _create(service, sample_booking_data)

    deleted = await service.delete_booking(booking.id)

    assert deleted.id == booking.id
    assert await service.get_booking_detail(booking.id) is None


@pytest.mark.asyncio
async def test_delete_booking_not_found(test_session):
    """Test deleting a non-existent booking raises NotFoundError."""
    with pytest.raises(NotFoundError):
        await BookingService(test_session).delete_booking(uuid4())


@pytest.mark.asyncio
async def test_storage_failure_is_wrapped():
    """Test driver errors become a StorageError and roll the session back."""
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

    with pytest.raises(StorageError) as exc_info:
        await BookingService(session).list_bookings()

    assert str(exc_info.value) == "Error fetching the bookings."
    assert "connection lost" not in str(exc_info.value.problem_details)
    session.rollback.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("blank", ["", "   "])
async def test_blank_identifiers_are_rejected(test_session, sample_booking_data, blank):
    """Test every booking lookup refuses an empty or whitespace identifier."""
    service = BookingService(test_session)
    await _create(service, sample_booking_data)

    with pytest.raises(ValidationError):
        await service.update_booking(blank, UpdateBookingRequest(tickets=3))
    with pytest.raises(ValidationError):
        await service.delete_booking(blank)
    with pytest.raises(ValidationError):
        await service.list_bookings_for_product(blank)
    with pytest.raises(ValidationError):
        await service.update_status_by_transaction(blank, "completed")

    remaining = await service.list_bookings()
    assert len(remaining) == 1
    assert remaining[0].tickets == 2
    assert remaining[0].status == BookingStatus.IN_PROCESS
