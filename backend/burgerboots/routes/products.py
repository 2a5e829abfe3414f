"""
Burger Boots Backend — Product Route Handlers
===============================================

What:  /api/products endpoints (list, by category, detail, create, update, delete).
How:   Extracts query/form data, delegates to ProductService, returns JSON.
Who:   Called by the frontend ProductList, AddProduct and EditProduct views.

Request bodies are multipart/form-data with an optional `image` file field.
Every form field is optional at the HTTP layer: missing required fields are
reported by the service as a 400 with the list of missing names, not as
FastAPI's generic 422. Query parameters are read as strings for the same
reason (a non-numeric `page` falls back to the default).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.database import get_db_session
from burgerboots.routes.media import read_upload
from burgerboots.schemas.common import DeleteResponse, ErrorResponse
from burgerboots.schemas.product import (
    ProductCategoryListResponse,
    ProductListResponse,
    ProductResponse,
)
from burgerboots.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

WRITE_ERRORS = {
    400: {"description": "Missing or invalid fields", "model": ErrorResponse},
    413: {"description": "Image too large", "model": ErrorResponse},
    415: {"description": "Image type not allowed", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=ProductListResponse,
    responses={400: {"description": "Invalid pagination", "model": ErrorResponse}},
    summary="List products with pagination",
    description=(
        "Newest first. `search` matches the product name exactly (case-insensitive); "
        "without a search, `category` matches as a case-insensitive substring."
    ),
)
async def list_products(
    page: Optional[str] = Query(default=None, description="Page number, 1-based (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 6)"),
    search: Optional[str] = Query(default=None, description="Exact product name"),
    category: Optional[str] = Query(default=None, description="Category substring"),
    db: AsyncSession = Depends(get_db_session),
) -> ProductListResponse:
    return await product_service.list_products(
        db, page=page, limit=limit, search=search, category=category
    )


@router.get(
    "/category/{category}",
    response_model=ProductCategoryListResponse,
    responses={400: {"description": "Invalid pagination", "model": ErrorResponse}},
    summary="List products in a category",
)
async def list_products_by_category(
    category: str,
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ProductCategoryListResponse:
    return await product_service.list_by_category(db, category, page=page, limit=limit)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a single product",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get(db, product_id)


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses=WRITE_ERRORS,
    summary="Create a product",
)
async def create_product(
    name: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    quantity: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="JPEG, PNG or WebP, max 5MB"),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    upload = await read_upload(image)
    return await product_service.create(
        db,
        fields={
            "name": name,
            "price": price,
            "quantity": quantity,
            "description": description,
            "category": category,
        },
        image=upload,
    )


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**WRITE_ERRORS, 404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Update a product",
    description="Only the submitted fields change. A new image replaces the reference.",
)
async def update_product(
    product_id: str,
    name: Optional[str] = Form(default=None),
    price: Optional[str] = Form(default=None),
    quantity: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    upload = await read_upload(image)
    return await product_service.update(
        db,
        product_id,
        fields={
            "name": name,
            "price": price,
            "quantity": quantity,
            "description": description,
            "category": category,
        },
        image=upload,
    )


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product",
    description="Removes the record only; its image file stays in storage.",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await product_service.delete(db, product_id)
