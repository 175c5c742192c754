"""Schemas shared by the catalog lookup resources."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateCatalogEntryRequest(BaseModel):
    """Request schema for creating a catalog entry."""

    name: Optional[str] = Field(None, max_length=155, description="Display name")
    description: Optional[str] = Field(None, max_length=2000, description="Longer description")
    icon: Optional[str] = Field(None, max_length=255, description="Icon reference (amenities only)")


class UpdateCatalogEntryRequest(CreateCatalogEntryRequest):
    """Request schema for a partial catalog entry update."""


class CatalogEntry(BaseModel):
    """Catalog entry response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime
