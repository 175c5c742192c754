"""Booking model definition."""

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .product import Product
    from .tour import TourDate
    from .user import User


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    COMPLETED = "completed"
    IN_PROCESS = "in-process"
    CANCELED = "canceled"


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Purchase record linking a user, a product and payment details."""

    __tablename__ = "bookings"

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id"),
        nullable=False,
        index=True
    )
    tour_date_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tour_dates.id", ondelete="SET NULL"),
        nullable=True
    )

    # Booking details
    tickets: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Payment details
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    status: Mapped[BookingStatus] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.IN_PROCESS,
        index=True
    )

    __table_args__ = (
        CheckConstraint("tickets > 0", name="ck_booking_tickets_positive"),
        CheckConstraint("total >= 0", name="ck_booking_total_non_negative"),
        CheckConstraint(
            "status IN ('completed', 'in-process', 'canceled')",
            name="ck_booking_status_valid"
        ),
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="bookings")
    product: Mapped["Product"] = relationship("Product", back_populates="bookings")
    tour_date: Mapped["TourDate | None"] = relationship("TourDate")

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, user_id='{self.user_id}', product_id={self.product_id}, "
            f"tickets={self.tickets}, status={self.status})>"
        )
