from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class Timestamps(CamelModel):
    """Common created/updated timestamp fields."""
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")


class PaginationMeta(CamelModel):
    """Pagination block returned with list responses."""
    page: int = Field(..., ge=1)
    per_page: int = Field(..., ge=1)
    total: int = Field(..., ge=0, description="Number of records matching the filter")
    total_pages: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    """Standard message response."""
    success: bool = Field(default=True)
    message: str = Field(..., description="Human readable message")


# PUBLIC_INTERFACE
class ApiResponse(BaseModel, Generic[T]):
    """Success envelope wrapping a payload."""
    success: bool = Field(default=True)
    message: Optional[str] = Field(default=None)
    data: T


# PUBLIC_INTERFACE
class ListResponse(BaseModel, Generic[T]):
    """Success envelope for paginated collections."""
    success: bool = Field(default=True)
    data: List[T]
    pagination: PaginationMeta


class FieldError(BaseModel):
    """One field-level validation problem."""
    field: str = Field(..., description="Offending field (camelCase) or 'body'")
    message: str = Field(...)


# PUBLIC_INTERFACE
class ErrorResponse(CamelModel):
    """Standardized API error envelope returned by exception handlers."""
    success: bool = Field(default=False)
    message: str = Field(..., description="Human-readable error message")
    errors: Optional[List[FieldError]] = Field(default=None, description="Field-level errors, if any")
    detail: Optional[Any] = Field(default=None, description="Diagnostics (non-production only)")
    correlation_id: Optional[str] = Field(default=None, description="Request correlation ID")
    path: Optional[str] = Field(default=None, description="Request path")
    method: Optional[str] = Field(default=None, description="HTTP method")
    timestamp: datetime = Field(..., description="Error timestamp (UTC)")
