"""Services for ratings, comments and FAQs."""

import logging
from typing import Any

from sqlalchemy import func, select

from ..models.feedback import Comment, Faq, Rating
from ..schemas.feedback import RatingSummary
from .base import CrudService, parse_uuid, storage_boundary

logger = logging.getLogger(__name__)


class RatingService(CrudService[Rating]):
    """Service for product ratings."""

    model = Rating
    resource_type = "rating"
    required_fields = ("user_id", "product_id", "rating")

    async def list_for_product(self, product_id: Any) -> list[Rating]:
        key = parse_uuid(product_id, "product ID")
        return await self.list_all(Rating.product_id == key)

    async def summarize_product(self, product_id: Any) -> RatingSummary:
        """Average and count of a product's ratings."""
        key = parse_uuid(product_id, "product ID")

        async with storage_boundary(self.db, "Error fetching the rating summary.", product_id=str(key)):
            result = await self.db.execute(
                select(func.avg(Rating.rating), func.count(Rating.id)).where(Rating.product_id == key)
            )
            average, count = result.one()

        return RatingSummary(
            product_id=key,
            average=round(float(average), 2) if average is not None else None,
            count=count,
        )


class CommentService(CrudService[Comment]):
    """Service for product comments."""

    model = Comment
    resource_type = "comment"
    required_fields = ("user_id", "product_id", "content")

    async def list_for_product(self, product_id: Any) -> list[Comment]:
        key = parse_uuid(product_id, "product ID")
        return await self.list_all(Comment.product_id == key)


class FaqService(CrudService[Faq]):
    """Service for frequently asked questions."""

    model = Faq
    resource_type = "FAQ"
    required_fields = ("question", "answer")

    async def list_for_product(self, product_id: Any) -> list[Faq]:
        key = parse_uuid(product_id, "product ID")
        return await self.list_all(Faq.product_id == key)
