"""
Burger Boots Backend — Shared Pydantic Schemas
================================================

What:  Response models shared by every resource: pagination metadata, the
       error envelope and the health report.

JSON naming:
    The API speaks camelCase (createdAt, currentPage, hasNext) because the
    frontend consumes it directly. Models subclass `ApiModel`, which generates
    camelCase aliases while Python code keeps snake_case attribute names.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationResponse(ApiModel):
    """
    Page metadata returned alongside every listing.

    Invariants:
        total_pages = ceil(total_items / limit), 0 when nothing matches
        has_next = current_page < total_pages
        has_prev = current_page > 1
    """

    current_page: int = Field(description="The requested page (1-based)")
    total_pages: int = Field(description="Number of pages for the current filters")
    total_items: int = Field(description="Records matching the current filters")
    has_next: bool = Field(description="Whether a later page has items")
    has_prev: bool = Field(description="Whether an earlier page exists")


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body.

    Optional keys appear depending on the error:
        errors          — every violated field (validation)
        missingFields   — names of absent required fields
        validCategories — the configured blog category set
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldErrorResponse]] = None
    missingFields: Optional[List[str]] = None
    validCategories: Optional[List[str]] = None
    requestId: Optional[str] = None


class DeleteResponse(BaseModel):
    message: str
    id: str


class HealthResponse(ApiModel):
    """Health check response showing service and store connectivity."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    timestamp: str = Field(description="Server time (UTC ISO 8601)")


def field_errors(exc_errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Flattens pydantic's error list into [{"field", "message"}].

    Nested locations (e.g. ("tags", 2)) are joined with dots: "tags.2".
    """
    flattened = []
    for err in exc_errors:
        loc = ".".join(str(part) for part in err.get("loc", ())) or "document"
        flattened.append({"field": loc, "message": err.get("msg", "Invalid value")})
    return flattened
