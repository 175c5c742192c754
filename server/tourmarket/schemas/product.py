"""Product-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProductFields(BaseModel):
    """Product columns a caller may set."""

    name: Optional[str] = Field(None, max_length=155, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2, description="Unit price")
    country: Optional[str] = Field(None, max_length=100, description="Country")
    address: Optional[str] = Field(None, description="Street address")
    max_people: Optional[int] = Field(None, ge=1, description="Capacity")
    duration: Optional[int] = Field(None, ge=1, description="Duration in hours")
    images: Optional[list[str]] = Field(None, description="Image URLs")
    videos: Optional[list[str]] = Field(None, description="Video URLs")
    files: Optional[list[str]] = Field(None, description="Attachment URLs")
    banner: Optional[str] = Field(None, description="Banner image URL")
    product_type_id: Optional[UUID] = Field(None, description="Service category")
    product_category_id: Optional[UUID] = Field(None, description="Product category")
    target_product_audience_id: Optional[UUID] = Field(None, description="Target audience")


class CreateProductRequest(ProductFields):
    """
    Request schema for creating a product.

    Tour fields are only read when the product type is Tour. They are left
    loosely typed so the tour validation can report the offending value.
    """

    user_id: Optional[str] = Field(None, max_length=255, description="Owning user")

    departure_point: Optional[str] = Field(None, description="Where the tour starts")
    available_dates: Any = Field(None, description="Scheduled departures (ISO 8601 strings)")
    itinerary: Any = Field(None, description="Ordered itinerary stops")
    highlight: Optional[str] = Field(None, description="Tour highlights")
    included: Optional[str] = Field(None, description="Items included in the price")
    amenities: Any = Field(None, description="Amenity IDs")


class UpdateProductRequest(ProductFields):
    """Request schema for a partial product update."""

    is_approved: Optional[bool] = Field(None, description="Approval flag")


class ApproveProductRequest(BaseModel):
    """Request schema for approving or withdrawing a product."""

    is_approved: bool = Field(True, description="Approval flag")


class Product(BaseModel):
    """Product response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    price: Decimal
    country: str
    address: str
    max_people: int
    duration: int
    images: list[str]
    videos: list[str]
    files: list[str]
    banner: Optional[str] = None
    is_approved: bool
    product_type_id: UUID
    product_category_id: UUID
    target_product_audience_id: UUID
    user_id: str
    created_at: datetime
    updated_at: datetime
