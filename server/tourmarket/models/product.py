"""Product model definition."""

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .booking import Booking
    from .catalog import ProductAmenity, ProductType
    from .tour import Tour
    from .user import User


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Sellable catalog item such as a tour."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(155), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")

    max_people: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    # Media references
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    videos: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    files: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    banner: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Foreign keys
    product_type_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("product_types.id"), nullable=False, index=True
    )
    product_category_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("product_categories.id"), nullable=False
    )
    target_product_audience_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("target_product_audiences.id"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("max_people > 0", name="ck_product_max_people_positive"),
        CheckConstraint("duration > 0", name="ck_product_duration_positive"),
    )

    # Relationships
    product_type: Mapped["ProductType"] = relationship("ProductType")
    owner: Mapped["User"] = relationship("User", back_populates="products")
    tour: Mapped["Tour | None"] = relationship(
        "Tour",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False
    )
    amenities: Mapped[list["ProductAmenity"]] = relationship(
        "ProductAmenity",
        secondary="product_amenity_links",
        viewonly=True
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="product", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class ProductAmenityLink(Base):
    """Join row between a tour product and one of its amenities."""

    __tablename__ = "product_amenity_links"

    product_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    product_amenity_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("product_amenities.id", ondelete="CASCADE"), primary_key=True
    )
