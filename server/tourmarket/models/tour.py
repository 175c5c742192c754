"""Tour and TourDate model definitions."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .product import Product


class Tour(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Tour-specific details of a product whose type is Tour."""

    __tablename__ = "tours"

    product_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )

    departure_point: Mapped[str] = mapped_column(Text, nullable=False)
    # ISO 8601 strings, one per scheduled departure
    available_dates: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    itinerary: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlight: Mapped[str] = mapped_column(Text, nullable=False)
    included: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="tour")
    dates: Mapped[list["TourDate"]] = relationship(
        "TourDate",
        back_populates="tour",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TourDate.date"
    )

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, product_id={self.product_id})>"


class TourDate(UUIDPrimaryKeyMixin, Base):
    """A concrete scheduled occurrence of a tour."""

    __tablename__ = "tour_dates"

    tour_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tours.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("tour_id", "date", name="uq_tour_date_per_tour"),
    )

    tour: Mapped["Tour"] = relationship("Tour", back_populates="dates")

    def __repr__(self) -> str:
        return f"<TourDate(id={self.id}, tour_id={self.tour_id}, date={self.date})>"
