"""User and role Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CreateUserRequest(BaseModel):
    """Request schema for registering a user."""

    id: Optional[str] = Field(None, max_length=255, description="Identity provider user ID")
    email: Optional[EmailStr] = Field(None, description="Email address")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    role_id: Optional[UUID] = Field(None, description="Assigned role")


class UpdateUserRequest(BaseModel):
    """Request schema for a partial user update."""

    email: Optional[EmailStr] = Field(None, description="Email address")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    role_id: Optional[UUID] = Field(None, description="Assigned role")


class User(BaseModel):
    """User response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    role_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
