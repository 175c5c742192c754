"""Routers for the catalog lookup tables (roles, product types, categories, audiences, amenities)."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..models.catalog import ProductAmenity, ProductCategory, ProductType, TargetProductAudience
from ..models.user import Role
from ..schemas.catalog import CatalogEntry, CreateCatalogEntryRequest, UpdateCatalogEntryRequest
from ..schemas.common import PROBLEM_RESPONSES, MessageResponse
from ..services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

DB_DEPENDENCY = Depends(get_db)


def build_catalog_router(prefix: str, model: type, resource_type: str) -> APIRouter:
    """
    Build the five CRUD routes for one catalog table.

    Args:
        prefix: Mount path, e.g. ``/product-types``
        model: Mapped catalog model
        resource_type: Name used in messages and errors
    """
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")], responses=PROBLEM_RESPONSES)
    label = resource_type.capitalize()

    def _service(db: AsyncSession) -> CatalogService:
        return CatalogService(db, model, resource_type)

    @router.get("", response_model=list[CatalogEntry])
    async def list_entries(db: AsyncSession = DB_DEPENDENCY) -> list[CatalogEntry]:
        entries = await _service(db).list_all()
        return [CatalogEntry.model_validate(entry) for entry in entries]

    @router.get("/{entry_id}", response_model=CatalogEntry)
    async def get_entry(entry_id: str, db: AsyncSession = DB_DEPENDENCY) -> CatalogEntry:
        entry = await _service(db).get_or_raise(entry_id)
        return CatalogEntry.model_validate(entry)

    @router.post("", response_model=MessageResponse[CatalogEntry], status_code=status.HTTP_201_CREATED)
    async def create_entry(
        request: CreateCatalogEntryRequest,
        db: AsyncSession = DB_DEPENDENCY
    ) -> MessageResponse[CatalogEntry]:
        entry = await _service(db).create(request.model_dump(exclude_none=True))
        return MessageResponse[CatalogEntry](
            message=f"{label} created successfully",
            data=CatalogEntry.model_validate(entry)
        )

    @router.put("/{entry_id}", response_model=MessageResponse[CatalogEntry])
    async def update_entry(
        entry_id: str,
        request: UpdateCatalogEntryRequest,
        db: AsyncSession = DB_DEPENDENCY
    ) -> MessageResponse[CatalogEntry]:
        entry = await _service(db).update(entry_id, request.model_dump(exclude_none=True))
        return MessageResponse[CatalogEntry](
            message=f"{label} updated successfully",
            data=CatalogEntry.model_validate(entry)
        )

    @router.delete("/{entry_id}", response_model=MessageResponse[CatalogEntry])
    async def delete_entry(entry_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[CatalogEntry]:
        entry = await _service(db).delete(entry_id)
        return MessageResponse[CatalogEntry](
            message=f"{label} deleted successfully",
            data=CatalogEntry.model_validate(entry)
        )

    return router


roles_router = build_catalog_router("/roles", Role, "role")
product_types_router = build_catalog_router("/product-types", ProductType, "product type")
product_categories_router = build_catalog_router("/product-category", ProductCategory, "product category")
product_audiences_router = build_catalog_router("/product-audience", TargetProductAudience, "product audience")
product_amenities_router = build_catalog_router("/product-amenities", ProductAmenity, "product amenity")

CATALOG_ROUTERS = (
    roles_router,
    product_types_router,
    product_categories_router,
    product_audiences_router,
    product_amenities_router,
)
