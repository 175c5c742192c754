"""Booking-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..models.booking import BookingStatus


class BookingFields(BaseModel):
    """Fields a caller may set on a booking; anything else is dropped."""

    model_config = ConfigDict(populate_by_name=True)

    tour_date_id: Optional[UUID] = Field(None, description="Selected tour date")
    tickets: Optional[int] = Field(None, ge=1, description="Number of tickets")
    total: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2, description="Total price")
    payment_method: Optional[str] = Field(None, alias="paymentMethod", max_length=50, description="Payment method")
    transaction_id: Optional[str] = Field(
        None, alias="idTransaccion", max_length=255, description="Payment transaction identifier"
    )
    status: Optional[BookingStatus] = Field(None, description="Booking status")


class CreateBookingRequest(BookingFields):
    """Request schema for creating a booking."""

    user_id: Optional[str] = Field(None, max_length=255, description="Booking user")
    product_id: Optional[UUID] = Field(None, description="Booked product")


class UpdateBookingRequest(BookingFields):
    """Request schema for a partial booking update."""


class UpdateBookingStatusRequest(BaseModel):
    """Request schema for a payment status notification."""

    status: BookingStatus = Field(..., description="New booking status")


class Booking(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique booking ID")
    user_id: str = Field(..., description="Booking user")
    product_id: UUID = Field(..., description="Booked product")
    tour_date_id: Optional[UUID] = Field(None, description="Selected tour date")
    tickets: int = Field(..., ge=1, description="Number of tickets")
    total: Decimal = Field(..., description="Total price")
    payment_method: str = Field(
        ...,
        validation_alias=AliasChoices("payment_method", "paymentMethod"),
        serialization_alias="paymentMethod",
        description="Payment method"
    )
    transaction_id: str = Field(
        ...,
        validation_alias=AliasChoices("transaction_id", "idTransaccion"),
        serialization_alias="idTransaccion",
        description="Payment transaction identifier"
    )
    status: BookingStatus = Field(..., description="Booking status")
    created_at: datetime = Field(..., description="Booking creation time (ISO 8601)")
    updated_at: datetime = Field(..., description="Last modification time (ISO 8601)")


class BookingDetail(BaseModel):
    """Booking joined with its user, product and tour date."""

    booking_id: UUID = Field(..., description="Unique booking ID")
    name: str = Field(..., description="Full name of the booking user")
    product: Optional[str] = Field(None, description="Booked product name")
    product_id: UUID = Field(..., description="Booked product")
    tickets: int = Field(..., description="Number of tickets")
    total: Decimal = Field(..., description="Total price")
    selected_date: Optional[str] = Field(None, description="Tour date in long localized form")
