"""
Burger Boots Backend — Product Schemas
========================================

What:  Pydantic models for products:
       - ProductDocument: the validation schema the record store enforces on
         every insert and update
       - ProductResponse / ProductListResponse: the API contract

Why a separate document schema:
    Validation must report every violated field at once, with messages a
    shop owner understands ("Price cannot exceed $10,000"), and must run on
    updates too. Pydantic collects all field errors in one pass, which the
    record store turns into a single ValidationError.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from burgerboots.schemas.common import ApiModel, PaginationResponse

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 50
PRICE_MIN = 0
PRICE_MAX = 10_000


# ══════════════════════════════════════════════════════════════════════════
# Validation Document: what the record store accepts
# ══════════════════════════════════════════════════════════════════════════


class ProductDocument(BaseModel):
    """
    A complete product document as stored.

    Strings are trimmed before checks. Form submissions arrive as strings;
    lax coercion turns "12.50" into 12.5 and "3" into 3.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str
    price: float = Field(allow_inf_nan=False)
    quantity: int = 0
    description: str = ""
    category: str = ""
    image: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("name_required", "Product name is required")
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "name_too_long",
                "Product name cannot exceed {max} characters",
                {"max": NAME_MAX_LENGTH},
            )
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v < PRICE_MIN:
            raise PydanticCustomError("price_negative", "Price cannot be negative")
        if v > PRICE_MAX:
            raise PydanticCustomError("price_too_high", "Price cannot exceed $10,000")
        return v

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        if v < 0:
            raise PydanticCustomError("quantity_negative", "Quantity cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description_too_long",
                "Description cannot exceed {max} characters",
                {"max": DESCRIPTION_MAX_LENGTH},
            )
        return v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if len(v) > CATEGORY_MAX_LENGTH:
            raise PydanticCustomError(
                "category_too_long",
                "Category cannot exceed {max} characters",
                {"max": CATEGORY_MAX_LENGTH},
            )
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(ApiModel):
    """Full representation of a stored product."""

    id: uuid.UUID
    name: str
    price: float
    quantity: int
    description: str
    category: str
    image: str = Field(description="Public media reference, empty when no image")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, product) -> "ProductResponse":
        return cls.model_validate(product)


class ProductListResponse(ApiModel):
    """GET /api/products — one page plus the distinct category set."""

    products: List[ProductResponse]
    pagination: PaginationResponse
    categories: List[str] = Field(default_factory=list)


class ProductCategoryListResponse(ApiModel):
    """GET /api/products/category/{category} — one page for a category."""

    products: List[ProductResponse]
    pagination: PaginationResponse
    category: str
