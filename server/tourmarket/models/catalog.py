"""Catalog lookup tables referenced by products."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import TimestampMixin, UUIDPrimaryKeyMixin


class CatalogEntry(UUIDPrimaryKeyMixin, TimestampMixin):
    """Columns shared by every catalog table."""

    name: Mapped[str] = mapped_column(String(155), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}')>"


class ProductType(CatalogEntry, Base):
    """Kind of service a product is (Tour, Transport, Lodging)."""

    __tablename__ = "product_types"


class ProductCategory(CatalogEntry, Base):
    """Thematic category (Adventure, Culture, Gastronomy)."""

    __tablename__ = "product_categories"


class TargetProductAudience(CatalogEntry, Base):
    """Audience a product is aimed at (Families, Couples, Solo)."""

    __tablename__ = "target_product_audiences"


class ProductAmenity(CatalogEntry, Base):
    """Feature tag attachable to a tour (Wi-Fi, Meals, Guide)."""

    __tablename__ = "product_amenities"

    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
