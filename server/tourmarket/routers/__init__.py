"""FastAPI routers package."""

from fastapi import APIRouter

from ..core.config import settings
from .booking import router as booking_router
from .catalog import CATALOG_ROUTERS
from .feedback import comments_router, faqs_router, ratings_router
from .health import router as health_router
from .metrics import router as metrics_router
from .products import router as products_router
from .users import router as users_router

# Every resource router is served under the configured API prefix
api_router = APIRouter(prefix=settings.api_prefix)
api_router.include_router(users_router)
api_router.include_router(products_router)
api_router.include_router(booking_router)
api_router.include_router(ratings_router)
api_router.include_router(comments_router)
api_router.include_router(faqs_router)
for catalog_router in CATALOG_ROUTERS:
    api_router.include_router(catalog_router)

__all__ = [
    "api_router",
    "booking_router",
    "comments_router",
    "faqs_router",
    "health_router",
    "metrics_router",
    "products_router",
    "ratings_router",
    "users_router",
]
