"""User router for account operations."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.common import PROBLEM_RESPONSES, MessageResponse
from ..schemas.user import CreateUserRequest, UpdateUserRequest, User
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], responses=PROBLEM_RESPONSES)

DB_DEPENDENCY = Depends(get_db)


@router.get("", response_model=list[User])
async def get_users(db: AsyncSession = DB_DEPENDENCY) -> list[User]:
    """List every user."""
    users = await UserService(db).list_all()
    return [User.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, db: AsyncSession = DB_DEPENDENCY) -> User:
    """Get a user by ID."""
    user = await UserService(db).get_or_raise(user_id)
    return User.model_validate(user)


@router.post("", response_model=MessageResponse[User], status_code=status.HTTP_201_CREATED)
async def create_user(request: CreateUserRequest, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[User]:
    """Register a user under the identity provider's ID."""
    user = await UserService(db).create(request.model_dump(exclude_none=True))

    return MessageResponse[User](
        message="User created successfully",
        data=User.model_validate(user)
    )


@router.put("/{user_id}", response_model=MessageResponse[User])
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> MessageResponse[User]:
    """Partially update a user."""
    user = await UserService(db).update(user_id, request.model_dump(exclude_none=True))

    return MessageResponse[User](
        message="User updated successfully",
        data=User.model_validate(user)
    )


@router.delete("/{user_id}", response_model=MessageResponse[User])
async def delete_user(user_id: str, db: AsyncSession = DB_DEPENDENCY) -> MessageResponse[User]:
    """Delete a user."""
    user = await UserService(db).delete(user_id)

    return MessageResponse[User](
        message="User deleted successfully",
        data=User.model_validate(user)
    )
