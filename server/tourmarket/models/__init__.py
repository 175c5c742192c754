"""Models module exporting all database models."""

from .booking import Booking, BookingStatus
from .catalog import ProductAmenity, ProductCategory, ProductType, TargetProductAudience
from .feedback import Comment, Faq, Rating
from .product import Product, ProductAmenityLink
from .tour import Tour, TourDate
from .user import Role, User

__all__ = [
    # Accounts
    "User",
    "Role",

    # Catalog lookups
    "ProductType",
    "ProductCategory",
    "TargetProductAudience",
    "ProductAmenity",

    # Products
    "Product",
    "ProductAmenityLink",
    "Tour",
    "TourDate",

    # Bookings
    "Booking",
    "BookingStatus",

    # Feedback
    "Rating",
    "Comment",
    "Faq",
]
