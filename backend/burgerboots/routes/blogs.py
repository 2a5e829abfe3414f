"""
Burger Boots Backend — Blog Route Handlers
============================================

What:  /api/blogs endpoints (list, categories, detail, create, update, delete).
Who:   Called by the frontend Blog view.

`/categories` is declared before `/{blog_id}` so it is not captured as an id.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.database import get_db_session
from burgerboots.routes.media import read_upload
from burgerboots.schemas.blog import BlogCategoriesResponse, BlogListResponse, BlogResponse
from burgerboots.schemas.common import DeleteResponse, ErrorResponse
from burgerboots.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blogs", tags=["Blogs"])

WRITE_ERRORS = {
    400: {"description": "Missing fields, invalid category or invalid fields", "model": ErrorResponse},
    413: {"description": "Image too large", "model": ErrorResponse},
    415: {"description": "Image type not allowed", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=BlogListResponse,
    responses={400: {"description": "Invalid pagination", "model": ErrorResponse}},
    summary="List blog posts with pagination",
    description=(
        "Newest first. `search` matches title, body or any tag as a case-insensitive "
        "substring; `category` is an exact match. Both may be combined."
    ),
)
async def list_blogs(
    page: Optional[str] = Query(default=None, description="Page number, 1-based (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10)"),
    category: Optional[str] = Query(default=None, description="Exact category"),
    search: Optional[str] = Query(default=None, description="Text to look for"),
    db: AsyncSession = Depends(get_db_session),
) -> BlogListResponse:
    return await blog_service.list_blogs(
        db, page=page, limit=limit, category=category, search=search
    )


@router.get(
    "/categories",
    response_model=BlogCategoriesResponse,
    summary="List valid blog categories",
)
async def list_categories() -> BlogCategoriesResponse:
    return blog_service.list_categories()


@router.get(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={404: {"description": "Blog not found", "model": ErrorResponse}},
    summary="Get a single blog post",
)
async def get_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    return await blog_service.get(db, blog_id)


@router.post(
    "",
    status_code=201,
    response_model=BlogResponse,
    responses=WRITE_ERRORS,
    summary="Create a blog post",
)
async def create_blog(
    title: Optional[str] = Form(default=None),
    body: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    tags: Optional[List[str]] = Form(default=None, description="Repeat the field or comma-separate"),
    category: Optional[str] = Form(default=None),
    featured: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="JPEG, PNG or WebP, max 5MB"),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    upload = await read_upload(image)
    return await blog_service.create(
        db,
        fields={
            "title": title,
            "body": body,
            "author": author,
            "tags": tags,
            "category": category,
            "featured": featured,
        },
        image=upload,
    )


@router.put(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={**WRITE_ERRORS, 404: {"description": "Blog not found", "model": ErrorResponse}},
    summary="Update a blog post",
    description="Only the submitted fields change. A new image replaces the reference.",
)
async def update_blog(
    blog_id: str,
    title: Optional[str] = Form(default=None),
    body: Optional[str] = Form(default=None),
    author: Optional[str] = Form(default=None),
    tags: Optional[List[str]] = Form(default=None),
    category: Optional[str] = Form(default=None),
    featured: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    upload = await read_upload(image)
    return await blog_service.update(
        db,
        blog_id,
        fields={
            "title": title,
            "body": body,
            "author": author,
            "tags": tags,
            "category": category,
            "featured": featured,
        },
        image=upload,
    )


@router.delete(
    "/{blog_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Blog not found", "model": ErrorResponse}},
    summary="Delete a blog post",
)
async def delete_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await blog_service.delete(db, blog_id)
