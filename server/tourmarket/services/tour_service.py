"""Tour service for the Tour subtype of products."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import ValidationError
from ..models.product import ProductAmenityLink
from ..models.tour import Tour, TourDate
from ..schemas.tour import Tour as TourSchema
from ..schemas.tour import TourDate as TourDateSchema
from .base import missing_fields, parse_uuid, storage_boundary

logger = logging.getLogger(__name__)

TOUR_REQUIRED_FIELDS = (
    "departure_point",
    "available_dates",
    "max_people",
    "highlight",
    "included",
    "duration",
)

_datetime_adapter = TypeAdapter(datetime)


def parse_available_dates(values: list[Any]) -> list[datetime]:
    """
    Parse every entry into a UTC date-time, dropping duplicates but keeping order.

    Values without an offset are taken as UTC, so "09:00" and "09:00Z" are
    the same date.

    Raises:
        ValidationError: Naming the first literal that is not a date-time
    """
    parsed: list[datetime] = []
    for value in values:
        try:
            moment = _datetime_adapter.validate_python(value)
        except PydanticValidationError:
            raise ValidationError(
                detail=f"The date '{value}' is not valid.",
                errors={"invalid_date": str(value)}
            ) from None
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        parsed.append(moment.astimezone(timezone.utc))
    return list(dict.fromkeys(parsed))


def validate_tour_payload(data: dict[str, Any]) -> tuple[list[datetime], list[UUID], list[str]]:
    """
    Check the tour fields of a product payload.

    Returns:
        Parsed dates, amenity IDs and itinerary

    Raises:
        ValidationError: If a field is missing, empty or has the wrong shape
    """
    problems = missing_fields(data, TOUR_REQUIRED_FIELDS)
    if "available_dates" not in problems and not isinstance(data["available_dates"], list):
        problems.append("available_dates")

    if problems:
        logger.warning("Tour payload rejected", extra={"invalid_fields": problems})
        raise ValidationError(
            detail=f"Missing or invalid fields for a Tour product: {', '.join(problems)}.",
            errors={"invalid_fields": problems}
        )

    dates = parse_available_dates(data["available_dates"])

    itinerary = data.get("itinerary") or []
    if not isinstance(itinerary, list) or not all(isinstance(stop, str) for stop in itinerary):
        raise ValidationError(
            detail="The itinerary field must be a list of strings.",
            errors={"invalid_fields": ["itinerary"]}
        )

    amenities = data.get("amenities")
    if not isinstance(amenities, list) or not amenities:
        raise ValidationError(
            detail="The amenities field must be a non-empty list.",
            errors={"invalid_fields": ["amenities"]}
        )
    amenity_ids = list(dict.fromkeys(parse_uuid(amenity, "amenity ID") for amenity in amenities))

    return dates, amenity_ids, itinerary


class TourService:
    """Service for tour-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_tour(self, product_id: UUID, data: dict[str, Any]) -> Tour:
        """
        Add the tour rows of a freshly inserted Tour product to the session.

        Inserts one Tour, one TourDate per available date and one amenity link
        per amenity. Nothing is committed; the caller owns the transaction, so a
        failure here leaves no partial rows behind.

        Args:
            product_id: ID of the product just flushed
            data: Raw product payload

        Returns:
            Pending tour entity

        Raises:
            ValidationError: If the tour fields are missing or malformed
        """
        dates, amenity_ids, itinerary = validate_tour_payload(data)

        tour = Tour(
            product_id=product_id,
            departure_point=data["departure_point"],
            available_dates=[value.isoformat() for value in dates],
            itinerary=itinerary,
            highlight=data["highlight"],
            included=data["included"],
            dates=[TourDate(date=value) for value in dates],
        )
        self.db.add(tour)
        self.db.add_all(
            ProductAmenityLink(product_id=product_id, product_amenity_id=amenity_id)
            for amenity_id in amenity_ids
        )
        await self.db.flush()

        logger.info(
            "Tour rows staged",
            extra={
                "product_id": str(product_id),
                "tour_id": str(tour.id),
                "dates": len(dates),
                "amenities": len(amenity_ids)
            }
        )

        return tour

    async def get_tour_for_product(self, product_id: Any) -> Optional[TourSchema]:
        """
        Get the tour of a product with its dates and amenity IDs.

        Returns:
            Tour view, or None if the product has no tour
        """
        key = parse_uuid(product_id, "product ID")

        async with storage_boundary(self.db, "Error fetching the tour.", product_id=str(key)):
            result = await self.db.execute(
                select(Tour).options(selectinload(Tour.dates)).where(Tour.product_id == key)
            )
            tour = result.scalar_one_or_none()
            if tour is None:
                return None

            amenity_result = await self.db.execute(
                select(ProductAmenityLink.product_amenity_id).where(ProductAmenityLink.product_id == key)
            )
            amenity_ids = list(amenity_result.scalars().all())

        return TourSchema(
            id=tour.id,
            product_id=tour.product_id,
            departure_point=tour.departure_point,
            available_dates=tour.available_dates,
            itinerary=tour.itinerary,
            highlight=tour.highlight,
            included=tour.included,
            dates=[TourDateSchema.model_validate(value) for value in tour.dates],
            amenity_ids=amenity_ids,
        )

    async def list_tour_dates(self, product_id: Any) -> list[TourDate]:
        """List the scheduled dates of a product's tour, earliest first."""
        key = parse_uuid(product_id, "product ID")

        async with storage_boundary(self.db, "Error fetching the tour dates.", product_id=str(key)):
            result = await self.db.execute(
                select(TourDate)
                .join(Tour, TourDate.tour_id == Tour.id)
                .where(Tour.product_id == key)
                .order_by(TourDate.date)
            )
            return list(result.scalars().all())
