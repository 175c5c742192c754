"""Rating, comment and FAQ Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateRatingRequest(BaseModel):
    user_id: Optional[str] = Field(None, max_length=255)
    product_id: Optional[UUID] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = Field(None, max_length=2000)


class UpdateRatingRequest(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = Field(None, max_length=2000)


class Rating(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    product_id: UUID
    rating: int
    review: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RatingSummary(BaseModel):
    """Average rating of a product."""

    product_id: UUID
    average: Optional[float] = Field(None, description="Mean rating, null when unrated")
    count: int


class CreateCommentRequest(BaseModel):
    user_id: Optional[str] = Field(None, max_length=255)
    product_id: Optional[UUID] = None
    content: Optional[str] = Field(None, max_length=5000)


class UpdateCommentRequest(BaseModel):
    content: Optional[str] = Field(None, max_length=5000)


class Comment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    product_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime


class CreateFaqRequest(BaseModel):
    product_id: Optional[UUID] = None
    question: Optional[str] = Field(None, max_length=2000)
    answer: Optional[str] = Field(None, max_length=5000)


class UpdateFaqRequest(CreateFaqRequest):
    pass


class Faq(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    product_id: Optional[UUID] = None
    question: str
    answer: str
    created_at: datetime
    updated_at: datetime
