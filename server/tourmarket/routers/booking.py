"""Booking router for booking operations."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.booking import (
    Booking,
    BookingDetail,
    CreateBookingRequest,
    UpdateBookingRequest,
    UpdateBookingStatusRequest,
)
from ..schemas.common import PROBLEM_RESPONSES, MessageResponse
from ..services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"], responses=PROBLEM_RESPONSES)

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)


def _convert_booking_to_schema(booking_model) -> Booking:
    """Convert booking model to schema."""
    return Booking.model_validate(booking_model)


@router.get("", response_model=list[Booking])
async def get_bookings(db: AsyncSession = DB_DEPENDENCY) -> list[Booking]:
    """List every booking."""
    bookings = await BookingService(db).list_bookings()
    return [_convert_booking_to_schema(booking) for booking in bookings]


@router.get("/user/{user_id}", response_model=list[Booking])
async def get_user_bookings(user_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Booking]:
    """List the bookings of a user."""
    bookings = await BookingService(db).list_bookings_for_user(user_id)
    return [_convert_booking_to_schema(booking) for booking in bookings]


@router.get("/product/{product_id}", response_model=list[Booking])
async def get_product_bookings(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Booking]:
    """List the bookings of a product."""
    bookings = await BookingService(db).list_bookings_for_product(product_id)
    return [_convert_booking_to_schema(booking) for booking in bookings]


@router.get("/{booking_id}", response_model=Optional[BookingDetail])
async def get_booking(booking_id: str, db: AsyncSession = DB_DEPENDENCY) -> Optional[BookingDetail]:
    """
    Get a booking with its user name, product name and formatted tour date.

    Returns null when no booking matches.
    """
    return await BookingService(db).get_booking_detail(booking_id)


@router.post("", response_model=MessageResponse[Booking], status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: CreateBookingRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Booking]:
    """Create a booking."""
    booking = await BookingService(db).create_booking(request)

    logger.info(
        "Booking created",
        extra={
            "booking_id": str(booking.id),
            "transaction_id": booking.transaction_id
        }
    )

    return MessageResponse[Booking](
        message="Booking created successfully",
        data=_convert_booking_to_schema(booking)
    )


@router.put("/transaction/{transaction_id}/status", response_model=MessageResponse[Booking])
async def update_booking_status(
    transaction_id: str,
    request: UpdateBookingStatusRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Booking]:
    """
    Apply a payment status notification.

    Unknown transactions are acknowledged with null data so providers stop
    retrying.
    """
    booking = await BookingService(db).update_status_by_transaction(transaction_id, request.status)

    if booking is None:
        return MessageResponse[Booking](message="No booking is associated with this transaction")

    return MessageResponse[Booking](
        message="Booking status updated successfully",
        data=_convert_booking_to_schema(booking)
    )


@router.put("/{booking_id}", response_model=MessageResponse[Booking])
async def update_booking(
    booking_id: str,
    request: UpdateBookingRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Booking]:
    """Partially update a booking."""
    booking = await BookingService(db).update_booking(booking_id, request)

    return MessageResponse[Booking](
        message="Booking updated successfully",
        data=_convert_booking_to_schema(booking)
    )


@router.delete("/{booking_id}", response_model=MessageResponse[Booking])
async def delete_booking(booking_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Booking]:
    """Delete a booking."""
    booking = await BookingService(db).delete_booking(booking_id)

    return MessageResponse[Booking](
        message="Booking deleted successfully",
        data=_convert_booking_to_schema(booking)
    )
