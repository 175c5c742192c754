"""Product service for business logic operations."""

import logging
from typing import Any, Optional

from sqlalchemy import select

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.catalog import ProductType
from ..models.product import Product
from ..schemas.product import CreateProductRequest, UpdateProductRequest
from .base import CrudService, ensure_required, require_identifier, storage_boundary
from .tour_service import TourService

logger = logging.getLogger(__name__)

TOUR_PRODUCT_TYPE = "tour"

PRODUCT_REQUIRED_FIELDS = (
    "name",
    "description",
    "price",
    "country",
    "max_people",
    "duration",
    "product_type_id",
    "product_category_id",
    "target_product_audience_id",
    "user_id",
)

PRODUCT_COLUMNS = PRODUCT_REQUIRED_FIELDS + ("address", "images", "videos", "files", "banner")


class ProductService(CrudService[Product]):
    """Service for product-related operations."""

    model = Product
    resource_type = "product"
    required_fields = PRODUCT_REQUIRED_FIELDS

    def __init__(self, db):
        super().__init__(db)
        self.tour_service = TourService(db)

    async def list_products(self, approved: Optional[bool] = None) -> list[Product]:
        """List products, optionally filtered by approval flag."""
        if approved is None:
            return await self.list_all()
        return await self.list_all(Product.is_approved.is_(approved))

    async def list_products_for_user(self, user_id: Optional[str]) -> list[Product]:
        """List the products owned by a user."""
        user_id = require_identifier(user_id, "user ID")
        return await self.list_all(Product.user_id == user_id)

    async def _get_product_type(self, product_type_id) -> ProductType:
        async with storage_boundary(self.db, "Error creating the product.",
                                    product_type_id=str(product_type_id)):
            product_type = await self.db.get(ProductType, product_type_id)

        if product_type is None:
            raise NotFoundError(resource_type="product type", resource_id=str(product_type_id))
        return product_type

    async def create_product(self, request: CreateProductRequest) -> Product:
        """
        Create a product, and its tour rows when the product type is Tour.

        The product, tour, tour dates and amenity links are committed in one
        transaction.

        Args:
            request: Product creation request

        Returns:
            Created product entity

        Raises:
            ValidationError: If product or tour fields are missing or malformed
            NotFoundError: If the product type does not exist
        """
        payload = request.model_dump()
        ensure_required(payload, PRODUCT_REQUIRED_FIELDS)

        product_type = await self._get_product_type(payload["product_type_id"])
        is_tour = product_type.name.strip().lower() == TOUR_PRODUCT_TYPE

        product = Product(**{
            column: payload[column] for column in PRODUCT_COLUMNS if payload.get(column) is not None
        })

        try:
            async with storage_boundary(self.db, "Error creating the product.",
                                        product_name=product.name, user_id=product.user_id):
                self.db.add(product)
                await self.db.flush()

                if is_tour:
                    await self.tour_service.create_tour(product.id, payload)

                await self.db.commit()
                await self.db.refresh(product)
        except ValidationError:
            await self.db.rollback()
            raise

        if is_tour:
            metrics_collector.record_tour_created()

        logger.info(
            "Product created successfully",
            extra={
                "product_id": str(product.id),
                "product_type": product_type.name,
                "user_id": product.user_id
            }
        )

        return product

    async def update_product(self, product_id: Any, request: UpdateProductRequest) -> Product:
        """Apply a partial update to the product columns."""
        return await self.update(product_id, request.model_dump(exclude_none=True))

    async def approve_product(self, product_id: Any, approved: bool = True) -> Product:
        """Set the approval flag of a product."""
        return await self.update(product_id, {"is_approved": approved})

    async def find_by_name(self, name: str) -> list[Product]:
        """Case-insensitive substring search on the product name."""
        async with storage_boundary(self.db, "Error searching the products.", query=name):
            result = await self.db.execute(
                select(Product).where(Product.name.icontains(name, autoescape=True)).order_by(Product.name)
            )
            return list(result.scalars().all())
