"""Routers for ratings, comments and FAQs attached to products."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.common import PROBLEM_RESPONSES, MessageResponse
from ..schemas.feedback import (
    Comment,
    CreateCommentRequest,
    CreateFaqRequest,
    CreateRatingRequest,
    Faq,
    Rating,
    RatingSummary,
    UpdateCommentRequest,
    UpdateFaqRequest,
    UpdateRatingRequest,
)
from ..services.feedback_service import CommentService, FaqService, RatingService

logger = logging.getLogger(__name__)

DB_DEPENDENCY = Depends(get_db)

ratings_router = APIRouter(prefix="/ratings", tags=["ratings"], responses=PROBLEM_RESPONSES)
comments_router = APIRouter(prefix="/comments", tags=["comments"], responses=PROBLEM_RESPONSES)
faqs_router = APIRouter(prefix="/faqs", tags=["faqs"], responses=PROBLEM_RESPONSES)


# Ratings

@ratings_router.get("", response_model=list[Rating])
async def get_ratings(db: AsyncSession = DB_DEPENDENCY) -> list[Rating]:
    """List every rating."""
    return [Rating.model_validate(item) for item in await RatingService(db).list_all()]


@ratings_router.get("/product/{product_id}", response_model=list[Rating])
async def get_product_ratings(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Rating]:
    """List the ratings of a product."""
    return [Rating.model_validate(item) for item in await RatingService(db).list_for_product(product_id)]


@ratings_router.get("/product/{product_id}/average", response_model=RatingSummary)
async def get_product_rating_average(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> RatingSummary:
    """Average rating and rating count of a product."""
    return await RatingService(db).summarize_product(product_id)


@ratings_router.get("/{rating_id}", response_model=Rating)
async def get_rating(rating_id: str, db: AsyncSession = DB_DEPENDENCY) -> Rating:
    return Rating.model_validate(await RatingService(db).get_or_raise(rating_id))


@ratings_router.post("", response_model=MessageResponse[Rating], status_code=status.HTTP_201_CREATED)
async def create_rating(request: CreateRatingRequest, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Rating]:
    rating = await RatingService(db).create(request.model_dump(exclude_none=True))
    return MessageResponse[Rating](message="Rating created successfully", data=Rating.model_validate(rating))


@ratings_router.put("/{rating_id}", response_model=MessageResponse[Rating])
async def update_rating(
    rating_id: str,
    request: UpdateRatingRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Rating]:
    rating = await RatingService(db).update(rating_id, request.model_dump(exclude_none=True))
    return MessageResponse[Rating](message="Rating updated successfully", data=Rating.model_validate(rating))


@ratings_router.delete("/{rating_id}", response_model=MessageResponse[Rating])
async def delete_rating(rating_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Rating]:
    rating = await RatingService(db).delete(rating_id)
    return MessageResponse[Rating](message="Rating deleted successfully", data=Rating.model_validate(rating))


# Comments

@comments_router.get("", response_model=list[Comment])
async def get_comments(db: AsyncSession = DB_DEPENDENCY) -> list[Comment]:
    """List every comment."""
    return [Comment.model_validate(item) for item in await CommentService(db).list_all()]


@comments_router.get("/product/{product_id}", response_model=list[Comment])
async def get_product_comments(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Comment]:
    """List the comments on a product."""
    return [Comment.model_validate(item) for item in await CommentService(db).list_for_product(product_id)]


@comments_router.get("/{comment_id}", response_model=Comment)
async def get_comment(comment_id: str, db: AsyncSession = DB_DEPENDENCY) -> Comment:
    return Comment.model_validate(await CommentService(db).get_or_raise(comment_id))


@comments_router.post("", response_model=MessageResponse[Comment], status_code=status.HTTP_201_CREATED)
async def create_comment(request: CreateCommentRequest, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Comment]:
    comment = await CommentService(db).create(request.model_dump(exclude_none=True))
    return MessageResponse[Comment](message="Comment created successfully", data=Comment.model_validate(comment))


@comments_router.put("/{comment_id}", response_model=MessageResponse[Comment])
async def update_comment(
    comment_id: str,
    request: UpdateCommentRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[Comment]:
    comment = await CommentService(db).update(comment_id, request.model_dump(exclude_none=True))
    return MessageResponse[Comment](message="Comment updated successfully", data=Comment.model_validate(comment))


@comments_router.delete("/{comment_id}", response_model=MessageResponse[Comment])
async def delete_comment(comment_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Comment]:
    comment = await CommentService(db).delete(comment_id)
    return MessageResponse[Comment](message="Comment deleted successfully", data=Comment.model_validate(comment))


# FAQs

@faqs_router.get("", response_model=list[Faq])
async def get_faqs(db: AsyncSession = DB_DEPENDENCY) -> list[Faq]:
    """List every FAQ."""
    return [Faq.model_validate(item) for item in await FaqService(db).list_all()]


@faqs_router.get("/product/{product_id}", response_model=list[Faq])
async def get_product_faqs(product_id: str, db: AsyncSession = DB_DEPENDENCY) -> list[Faq]:
    """List the FAQs of a product."""
    return [Faq.model_validate(item) for item in await FaqService(db).list_for_product(product_id)]


@faqs_router.get("/{faq_id}", response_model=Faq)
async def get_faq(faq_id: str, db: AsyncSession = DB_DEPENDENCY) -> Faq:
    return Faq.model_validate(await FaqService(db).get_or_raise(faq_id))


@faqs_router.post("", response_model=MessageResponse[Faq], status_code=status.HTTP_201_CREATED)
async def create_faq(request: CreateFaqRequest, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Faq]:
    faq = await FaqService(db).create(request.model_dump(exclude_none=True))
    return MessageResponse[Faq](message="FAQ created successfully", data=Faq.model_validate(faq))


@faqs_router.put("/{faq_id}", response_model=MessageResponse[Faq])
async def update_faq(faq_id: str, request: UpdateFaqRequest, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Faq]:
    faq = await FaqService(db).update(faq_id, request.model_dump(exclude_none=True))
    return MessageResponse[Faq](message="FAQ updated successfully", data=Faq.model_validate(faq))


@faqs_router.delete("/{faq_id}", response_model=MessageResponse[Faq])
async def delete_faq(faq_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[Faq]:
    faq = await FaqService(db).delete(faq_id)
    return MessageResponse[Faq](message="FAQ deleted successfully", data=Faq.model_validate(faq))
