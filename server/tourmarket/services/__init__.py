"""Service layer package."""

from .booking_service import BookingService
from .catalog_service import CatalogService
from .feedback_service import CommentService, FaqService, RatingService
from .product_service import ProductService
from .tour_service import TourService
from .user_service import UserService

__all__ = [
    "BookingService",
    "CatalogService",
    "CommentService",
    "FaqService",
    "ProductService",
    "RatingService",
    "TourService",
    "UserService",
]
