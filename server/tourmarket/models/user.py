"""User and Role model definitions."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base
from .mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .booking import Booking
    from .product import Product


class Role(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Role a user can hold (traveler, provider, admin)."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name='{self.name}')>"


class User(TimestampMixin, Base):
    """User entity; the identifier is issued by the external identity provider."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    role_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True
    )

    # Relationships
    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="owner", passive_deletes="all"
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="user", passive_deletes="all"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', email='{self.email}')>"
