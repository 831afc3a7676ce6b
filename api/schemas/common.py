"""Common Pydantic schemas shared across the API."""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar, Optional
from pydantic import AfterValidator, BaseModel, Field

from core.utils.datetime import ensure_utc


T = TypeVar("T")

# Timestamps are always reported in UTC, whatever the driver returns
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class PaginationParams(BaseModel):
    """Limit/offset query parameters."""

    limit: int = Field(default=50, ge=1, le=200, description="Maximum items to return")
    offset: int = Field(default=0, ge=0, description="Items to skip")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response wrapper."""

    items: list[T] = Field(description="List of items for this page")
    total: int = Field(ge=0, description="Total number of matching items")
    limit: int = Field(ge=1, description="Page size used")
    offset: int = Field(ge=0, description="Offset used")

    @classmethod
    def create(
        cls,
        items: list[T],
        total: int,
        pagination: PaginationParams,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response."""
        return cls(
            items=items,
            total=total,
            limit=pagination.limit,
            offset=pagination.offset,
        )


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: UTCDateTime = Field(description="Timestamp when the resource was created")
    updated_at: UTCDateTime = Field(description="Timestamp when the resource was last updated")


class ErrorBody(BaseModel):
    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human readable message")
    path: str
    method: str
    details: Optional[Any] = None
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response model."""

    error: ErrorBody


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
