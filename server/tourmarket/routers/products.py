"""Product router, including the tour view of Tour products."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import NotFoundError
from ..schemas.common import PROBLEM_RESPONSES, MessageResponse
from ..schemas.product import (
    ApproveProductRequest,
    CreateProductRequest,
    Product,
    UpdateProductRequest,
)
from ..schemas.tour import Tour, TourDate
from ..services.product_service import ProductService
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"], responses=PROBLEM_RESPONSES)

DB_DEPENDENCY = Depends(get_db)
APPROVED_QUERY = Query(None, description="Filter by approval flag")
SEARCH_QUERY = Query(None, min_length=1, description="Case-insensitive name search")


def _convert_product_to_schema(product_model) -> Product:
    """Convert product model to schema."""
    return Product.model_validate(product_model)


@router.get("", response_model=list[Product])
async def get_products(
    approved: Optional[bool] = APPROVED_QUERY,
    search: Optional[str] = SEARCH_QUERY,
    db: AsyncSession = DB_DEPENDENCY
) -> list[Product]:
    """
    List products.

    ``search`` takes precedence over ``approved``.
    """
    service = ProductService(db)
    if search:
        products = await service.find_by_name(search)
    else:
        products = await service.list_products(approved=approved)
    return [_convert_product_to_schema(product) for product in products]


@router.get("/user/{user_id}", response_model=list[Product])
async def get_user_products(user_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Product]:
    """List the products owned by a user."""
    products = await ProductService(db).list_products_for_user(user_id)
    return [_convert_product_to_schema(product) for product in products]


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> Product:
    """Get a product by ID."""
    product = await ProductService(db).get_or_raise(product_id)
    return _convert_product_to_schema(product)


@router.get("/{product_id}/tour", response_model=Tour)
async def get_product_tour(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> Tour:
    """Get the tour details, dates and amenities of a Tour product."""
    tour = await TourService(db).get_tour_for_product(product_id)
    if tour is None:
        raise NotFoundError(resource_type="tour", resource_id=product_id)
    return tour


@router.get("/{product_id}/tour/dates", response_model=list[TourDate])
async def get_product_tour_dates(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[TourDate]:
    """List the bookable dates of a Tour product, earliest first."""
    dates = await TourService(db).list_tour_dates(product_id)
    return [TourDate.model_validate(value) for value in dates]


@router.post("", response_model=MessageResponse[Product], status_code=status.HTTP_201_CREATED)
async def create_product(
    request: CreateProductRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Product]:
    """
    Create a product.

    When the product type is Tour the tour fields are required and the tour,
    its dates and its amenity links are stored with the product or not at all.
    """
    product = await ProductService(db).create_product(request)

    return MessageResponse[Product](
        message="Product created successfully",
        data=_convert_product_to_schema(product)
    )


@router.put("/{product_id}/approve", response_model=MessageResponse[Product])
async def approve_product(
    product_id: str,
    request: ApproveProductRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Product]:
    """Approve or withdraw a product."""
    product = await ProductService(db).approve_product(product_id, request.is_approved)

    logger.info(
        "Product approval changed",
        extra={"product_id": product_id, "is_approved": request.is_approved}
    )

    return MessageResponse[Product](
        message="Product approval updated successfully",
        data=_convert_product_to_schema(product)
    )


@router.put("/{product_id}", response_model=MessageResponse[Product])
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Product]:
    """Partially update a product."""
    product = await ProductService(db).update_product(product_id, request)

    return MessageResponse[Product](
        message="Product updated successfully",
        data=_convert_product_to_schema(product)
    )


@router.delete("/{product_id}", response_model=MessageResponse[Product])
async def delete_product(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Product]:
    """Delete a product together with its tour rows."""
    product = await ProductService(db).delete(product_id)

    return MessageResponse[Product](
        message="Product deleted successfully",
        data=_convert_product_to_schema(product)
    )
