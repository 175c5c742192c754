"""Generic service for the catalog lookup tables."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.catalog import CatalogEntry
from .base import CrudService


class CatalogService(CrudService[CatalogEntry]):
    """CRUD over one catalog table; entries are listed alphabetically."""

    required_fields = ("name",)

    def __init__(self, db: AsyncSession, model: type, resource_type: str):
        super().__init__(db)
        self.model = model
        self.resource_type = resource_type

    def _order_by(self):
        return self.model.name

    def _columns(self, values: dict[str, Any]) -> dict[str, Any]:
        # icon only exists on amenities
        return {field: value for field, value in values.items() if hasattr(self.model, field)}

    async def create(self, values: dict[str, Any]) -> CatalogEntry:
        return await super().create(self._columns(values))

    async def update(self, item_id: Any, values: dict[str, Any]) -> CatalogEntry:
        return await super().update(item_id, self._columns(values))
