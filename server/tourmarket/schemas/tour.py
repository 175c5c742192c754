"""Tour-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TourDate(BaseModel):
    """Scheduled tour date response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique tour date ID")
    date: datetime = Field(..., description="Departure time (ISO 8601)")


class Tour(BaseModel):
    """Tour response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique tour ID")
    product_id: UUID = Field(..., description="Owning product")
    departure_point: str = Field(..., description="Where the tour starts")
    available_dates: list[datetime] = Field(..., description="Scheduled departures")
    itinerary: list[str] = Field(default_factory=list, description="Ordered itinerary stops")
    highlight: str = Field(..., description="Tour highlights")
    included: str = Field(..., description="Items included in the price")
    dates: list[TourDate] = Field(default_factory=list, description="Bookable tour dates")
    amenity_ids: list[UUID] = Field(default_factory=list, description="Attached amenities")
