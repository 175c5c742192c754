"""Shared service plumbing: storage error boundary, input checks and generic CRUD."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, Iterable, Optional, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import Base
from ..core.exceptions import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@asynccontextmanager
async def storage_boundary(db: AsyncSession, message: str, **context: Any) -> AsyncIterator[None]:
    """
    Convert any SQLAlchemy failure raised inside the block into a StorageError.

    The session is rolled back and the driver error is logged; only ``message``
    reaches the caller.
    """
    try:
        yield
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            message,
            extra={**context, "error": str(e)},
            exc_info=True
        )
        raise StorageError(detail=message) from e


def require_identifier(value: Optional[str], label: str) -> str:
    """Reject empty identifiers."""
    if value is None or not str(value).strip():
        logger.warning("Missing identifier", extra={"identifier": label})
        raise ValidationError(
            detail=f"The {label} is required.",
            errors={"missing_fields": [label]}
        )
    return str(value).strip()


def parse_uuid(value: Any, label: str) -> UUID:
    """Parse a UUID identifier, raising ValidationError when empty or malformed."""
    if isinstance(value, UUID):
        return value
    raw = require_identifier(value, label)
    try:
        return UUID(raw)
    except ValueError:
        raise ValidationError(
            detail=f"The {label} '{raw}' is not a valid UUID.",
            errors={"invalid_fields": {label: raw}}
        ) from None


def missing_fields(data: dict[str, Any], required: Iterable[str]) -> list[str]:
    """Return the required keys that are absent or empty, in the given order."""
    return [field for field in required if data.get(field) in (None, "", [], {})]


def ensure_required(data: dict[str, Any], required: Sequence[str]) -> None:
    """Raise ValidationError naming every missing required field."""
    missing = missing_fields(data, required)
    if missing:
        logger.warning("Missing required fields", extra={"missing_fields": missing})
        raise ValidationError(
            detail=f"The fields {', '.join(missing)} are required.",
            errors={"missing_fields": missing}
        )


class CrudService(Generic[ModelT]):
    """
    Create/read/update/delete over one mapped model.

    Subclasses set ``model``, ``resource_type`` and ``required_fields``; string
    primary keys set ``uuid_ids = False``.
    """

    model: type[ModelT]
    resource_type: str = "resource"
    required_fields: Sequence[str] = ()
    uuid_ids: bool = True

    def __init__(self, db: AsyncSession):
        self.db = db

    def _label(self) -> str:
        return f"{self.resource_type} ID"

    def _parse_id(self, value: Any) -> Any:
        if self.uuid_ids:
            return parse_uuid(value, self._label())
        return require_identifier(value, self._label())

    def _order_by(self):
        return self.model.created_at

    async def list_all(self, *criteria) -> list[ModelT]:
        """Return every row matching ``criteria`` in creation order."""
        async with storage_boundary(self.db, f"Error fetching {self.resource_type} records.",
                                    resource_type=self.resource_type):
            stmt = select(self.model).where(*criteria).order_by(self._order_by())
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

    async def get(self, item_id: Any) -> Optional[ModelT]:
        """Return the row with ``item_id`` or None."""
        key = self._parse_id(item_id)
        async with storage_boundary(self.db, f"Error fetching the {self.resource_type}.",
                                    resource_id=str(key)):
            return await self.db.get(self.model, key)

    async def get_or_raise(self, item_id: Any) -> ModelT:
        """Return the row with ``item_id`` or raise NotFoundError."""
        item = await self.get(item_id)
        if item is None:
            logger.warning(
                f"{self.resource_type.capitalize()} not found",
                extra={"resource_id": str(item_id)}
            )
            raise NotFoundError(resource_type=self.resource_type, resource_id=str(item_id))
        return item

    async def create(self, values: dict[str, Any]) -> ModelT:
        """Validate required fields, insert a row and return it with generated columns."""
        ensure_required(values, self.required_fields)

        item = self.model(**values)
        async with storage_boundary(self.db, f"Error creating the {self.resource_type}.",
                                    resource_type=self.resource_type):
            self.db.add(item)
            await self.db.commit()
            await self.db.refresh(item)

        logger.info(
            f"{self.resource_type.capitalize()} created",
            extra={"resource_id": str(item.id)}
        )
        return item

    async def update(self, item_id: Any, values: dict[str, Any]) -> ModelT:
        """Apply a partial update; NotFoundError when no row matches."""
        item = await self.get_or_raise(item_id)

        async with storage_boundary(self.db, f"Error updating the {self.resource_type}.",
                                    resource_id=str(item_id)):
            for field, value in values.items():
                setattr(item, field, value)
            await self.db.commit()
            await self.db.refresh(item)

        logger.info(
            f"{self.resource_type.capitalize()} updated",
            extra={"resource_id": str(item_id), "fields": sorted(values)}
        )
        return item

    async def delete(self, item_id: Any) -> ModelT:
        """Hard-delete a row and return it; NotFoundError when no row matches."""
        item = await self.get_or_raise(item_id)

        async with storage_boundary(self.db, f"Error deleting the {self.resource_type}.",
                                    resource_id=str(item_id)):
            await self.db.delete(item)
            await self.db.commit()

        logger.info(
            f"{self.resource_type.capitalize()} deleted",
            extra={"resource_id": str(item_id)}
        )
        return item
