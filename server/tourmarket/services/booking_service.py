"""Booking service for business logic operations."""

import logging
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import NotFoundError, ValidationError
from ..core.formatting import format_long_datetime
from ..core.observability import metrics_collector
from ..models.booking import Booking, BookingStatus
from ..models.product import Product
from ..models.tour import TourDate
from ..models.user import User
from ..schemas.booking import BookingDetail, CreateBookingRequest, UpdateBookingRequest
from .base import ensure_required, parse_uuid, require_identifier, storage_boundary

logger = logging.getLogger(__name__)

# Wire names, in the order they are reported when missing
REQUIRED_BOOKING_FIELDS = ("user_id", "product_id", "paymentMethod", "idTransaccion")

# Columns a partial update may clear
NULLABLE_BOOKING_FIELDS = {"tour_date_id"}


class BookingService:
    """Service for booking-related operations."""

    def __init__(self, db: AsyncSession, locale: Optional[str] = None):
        self.db = db
        self.locale = locale or settings.date_locale

    async def list_bookings(self) -> list[Booking]:
        """Return every booking, unfiltered."""
        async with storage_boundary(self.db, "Error fetching the bookings."):
            result = await self.db.execute(select(Booking).order_by(Booking.created_at))
            return list(result.scalars().all())

    async def get_booking_detail(self, booking_id: Any) -> Optional[BookingDetail]:
        """
        Get a booking joined with its user, product and tour date.

        Args:
            booking_id: Booking to look up

        Returns:
            Enriched booking view, or None if no booking matches

        Raises:
            ValidationError: If the identifier is empty or malformed
        """
        key = parse_uuid(booking_id, "booking ID")

        stmt = (
            select(
                Booking.id,
                Booking.tickets,
                Booking.total,
                Booking.product_id,
                User.first_name,
                User.last_name,
                Product.name.label("product_name"),
                TourDate.date.label("tour_date"),
            )
            .select_from(Booking)
            .outerjoin(User, Booking.user_id == User.id)
            .outerjoin(Product, Booking.product_id == Product.id)
            .outerjoin(TourDate, Booking.tour_date_id == TourDate.id)
            .where(Booking.id == key)
            .limit(1)
        )

        async with storage_boundary(self.db, "Error fetching the booking details.", booking_id=str(key)):
            row = (await self.db.execute(stmt)).first()

        if row is None:
            logger.info("Booking not found", extra={"booking_id": str(key)})
            return None

        return BookingDetail(
            booking_id=row.id,
            name=f"{row.first_name or ''} {row.last_name or ''}".strip(),
            product=row.product_name,
            product_id=row.product_id,
            tickets=row.tickets,
            total=row.total,
            selected_date=format_long_datetime(row.tour_date, self.locale),
        )

    async def list_bookings_for_user(self, user_id: Optional[str]) -> list[Booking]:
        """
        List a user's bookings, oldest first.

        Raises:
            ValidationError: If the user ID is empty
        """
        user_id = require_identifier(user_id, "user ID")

        async with storage_boundary(self.db, "Error fetching the user's bookings.", user_id=user_id):
            result = await self.db.execute(
                select(Booking).where(Booking.user_id == user_id).order_by(Booking.created_at)
            )
            bookings = list(result.scalars().all())

        if not bookings:
            logger.info("User has no bookings", extra={"user_id": user_id})

        return bookings

    async def list_bookings_for_product(self, product_id: Any) -> list[Booking]:
        """
        List a product's bookings, oldest first.

        Raises:
            ValidationError: If the product ID is empty or malformed
        """
        key = parse_uuid(product_id, "product ID")

        async with storage_boundary(self.db, "Error fetching the product's bookings.", product_id=str(key)):
            result = await self.db.execute(
                select(Booking).where(Booking.product_id == key).order_by(Booking.created_at)
            )
            bookings = list(result.scalars().all())

        if not bookings:
            logger.info("Product has no bookings", extra={"product_id": str(key)})

        return bookings

    async def create_booking(self, request: CreateBookingRequest) -> Booking:
        """
        Create a booking from the allow-listed request fields.

        When no total is given it is computed as product price times tickets.

        Args:
            request: Booking creation request

        Returns:
            Created booking including generated ID and timestamps

        Raises:
            ValidationError: If any required field is missing (all are named)
            NotFoundError: If the total must be computed and the product does not exist
        """
        ensure_required(request.model_dump(by_alias=True), REQUIRED_BOOKING_FIELDS)

        values = request.model_dump(exclude_none=True)
        values.setdefault("tickets", 1)

        if values.get("total") is None:
            values["total"] = await self._compute_total(values["product_id"], values["tickets"])

        booking = Booking(**values)

        async with storage_boundary(self.db, "Error creating the booking.",
                                    user_id=values["user_id"], product_id=str(values["product_id"])):
            self.db.add(booking)
            await self.db.commit()
            await self.db.refresh(booking)

        metrics_collector.record_booking_created()
        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": str(booking.id),
                "user_id": booking.user_id,
                "product_id": str(booking.product_id),
                "tickets": booking.tickets,
                "transaction_id": booking.transaction_id
            }
        )

        return booking

    async def _compute_total(self, product_id, tickets: int) -> Decimal:
        async with storage_boundary(self.db, "Error creating the booking.", product_id=str(product_id)):
            product = await self.db.get(Product, product_id)

        if product is None:
            raise NotFoundError(resource_type="product", resource_id=str(product_id))

        return product.price * tickets

    async def update_booking(self, booking_id: Any, request: UpdateBookingRequest) -> Booking:
        """
        Apply a partial update to a booking.

        Raises:
            ValidationError: If the identifier is empty or malformed
            NotFoundError: If no booking matches
        """
        key = parse_uuid(booking_id, "booking ID")
        values = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_BOOKING_FIELDS
        }

        async with storage_boundary(self.db, "Error updating the booking.", booking_id=str(key)):
            booking = await self.db.get(Booking, key)
            if booking is None:
                logger.warning("Booking not found for update", extra={"booking_id": str(key)})
                raise NotFoundError(resource_type="booking", resource_id=str(key))

            for field, value in values.items():
                setattr(booking, field, value)

            await self.db.commit()
            await self.db.refresh(booking)

        logger.info(
            "Booking updated successfully",
            extra={"booking_id": str(key), "fields": sorted(values)}
        )

        return booking

    async def update_status_by_transaction(self, transaction_id: Optional[str], status: Any) -> Optional[Booking]:
        """
        Set the status of the bookings paid with ``transaction_id``.

        Payment notifications may be replayed or arrive for transactions that
        never produced a booking, so a miss is logged and returns None.

        Returns:
            The first updated booking, or None if no booking matches

        Raises:
            ValidationError: If the transaction ID is empty or the status unknown
        """
        transaction_id = require_identifier(transaction_id, "transaction ID")
        try:
            new_status = BookingStatus(status)
        except ValueError:
            raise ValidationError(
                detail=f"The status '{status}' is not valid.",
                errors={"allowed_statuses": [s.value for s in BookingStatus]}
            ) from None

        async with storage_boundary(self.db, "Error updating the booking status.", transaction_id=transaction_id):
            result = await self.db.execute(
                select(Booking).where(Booking.transaction_id == transaction_id).order_by(Booking.created_at)
            )
            bookings = list(result.scalars().all())

            for booking in bookings:
                booking.status = new_status

            if bookings:
                await self.db.commit()
                await self.db.refresh(bookings[0])

        metrics_collector.record_status_change(new_status.value, matched=bool(bookings))

        if not bookings:
            logger.warning(
                "Transaction received without an associated booking",
                extra={"transaction_id": transaction_id, "status": new_status.value}
            )
            return None

        logger.info(
            "Booking status updated from transaction",
            extra={
                "transaction_id": transaction_id,
                "status": new_status.value,
                "bookings_updated": len(bookings)
            }
        )

        return bookings[0]

    async def delete_booking(self, booking_id: Any) -> Booking:
        """
        Delete a booking and return it.

        Raises:
            ValidationError: If the identifier is empty or malformed
            NotFoundError: If no booking matches
        """
        key = parse_uuid(booking_id, "booking ID")

        async with storage_boundary(self.db, "Error deleting the booking.", booking_id=str(key)):
            booking = await self.db.get(Booking, key)
            if booking is None:
                logger.warning("Booking not found for deletion", extra={"booking_id": str(key)})
                raise NotFoundError(resource_type="booking", resource_id=str(key))

            await self.db.delete(booking)
            await self.db.commit()

        logger.info("Booking deleted successfully", extra={"booking_id": str(key)})

        return booking
