from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, as dashboard clients expect."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Pagination(CamelModel):
    """Pagination block returned by paged list endpoints."""
    current_page: int = Field(..., description="1-based page number")
    total_pages: int = Field(..., description="Number of pages at this limit")
    total_count: int = Field(..., description="Matching rows across all pages")
    limit: int = Field(..., description="Page size")
    has_next_page: bool = Field(...)
    has_prev_page: bool = Field(...)


class MessageResponse(BaseModel):
    """Standard message response."""
    message: str = Field(..., description="Human readable message")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Error envelope returned by the exception handlers."""
    error: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(default=None, description="Optional error details (e.g., validation issues)")
