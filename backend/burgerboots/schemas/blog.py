"""
Burger Boots Backend — Blog Schemas
=====================================

What:  BlogDocument (store-side validation) and the blog API contract.

Category checks:
    The valid category set is configuration, not a literal in this module.
    Callers pass it through pydantic's validation context:

        BlogDocument.model_validate(doc, context={"categories": ("Food", ...)})

    Without a context the category is only checked for presence.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from burgerboots.schemas.common import ApiModel, PaginationResponse

TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100


class BlogDocument(BaseModel):
    """A complete blog document as stored."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str
    body: str
    author: str
    category: str
    tags: List[str] = Field(default_factory=list)
    image: str = ""
    featured: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("title_required", "Blog title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_too_long",
                "Title cannot exceed {max} characters",
                {"max": TITLE_MAX_LENGTH},
            )
        return v

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("body_required", "Blog content is required")
        return v

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("author_required", "Author name is required")
        if len(v) > AUTHOR_MAX_LENGTH:
            raise PydanticCustomError(
                "author_too_long",
                "Author name cannot exceed {max} characters",
                {"max": AUTHOR_MAX_LENGTH},
            )
        return v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise PydanticCustomError("category_required", "Blog category is required")
        allowed = (info.context or {}).get("categories")
        if allowed is not None and v not in allowed:
            raise PydanticCustomError(
                "category_invalid",
                "{value} is not a valid category",
                {"value": v},
            )
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        if any(not tag for tag in v):
            raise PydanticCustomError("tag_blank", "Tags cannot be blank")
        return v


class BlogResponse(ApiModel):
    """Full representation of a stored blog post."""

    id: uuid.UUID
    title: str
    body: str
    author: str
    tags: List[str]
    category: str
    image: str
    featured: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, blog) -> "BlogResponse":
        # tags is an association proxy; materialize it as a plain list
        return cls(
            id=blog.id,
            title=blog.title,
            body=blog.body,
            author=blog.author,
            tags=list(blog.tags),
            category=blog.category,
            image=blog.image,
            featured=blog.featured,
            created_at=blog.created_at,
            updated_at=blog.updated_at,
        )


class BlogListResponse(ApiModel):
    """GET /api/blogs — one page of posts."""

    blogs: List[BlogResponse]
    pagination: PaginationResponse


class BlogCategoriesResponse(ApiModel):
    """GET /api/blogs/categories — the configured category set."""

    categories: List[str]
