"""User service for account operations."""

from ..models.user import User
from .base import CrudService


class UserService(CrudService[User]):
    """Users are keyed by the identity provider's string ID."""

    model = User
    resource_type = "user"
    required_fields = ("id", "email")
    uuid_ids = False
