"""Common Pydantic schemas."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class MessageResponse(BaseModel, Generic[DataT]):
    """Envelope returned by create, update and delete operations."""

    message: str = Field(..., description="Human-readable outcome")
    data: Optional[DataT] = Field(None, description="Affected record")


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="JSON path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


# Error responses documented on every resource router
PROBLEM_RESPONSES = {
    400: {"model": Problem, "description": "Validation error"},
    404: {"model": Problem, "description": "Resource not found"},
    500: {"model": Problem, "description": "Storage or internal error"},
}
