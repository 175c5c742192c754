"""Pydantic schemas for request/response validation."""

from .booking import *  # noqa: F403
from .catalog import *  # noqa: F403
from .common import *  # noqa: F403
from .feedback import *  # noqa: F403
from .product import *  # noqa: F403
from .tour import *  # noqa: F403
from .user import *  # noqa: F403
