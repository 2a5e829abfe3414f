"""
Burger Boots Backend — Product Service
========================================

What:  Product lifecycle (create/read/update/delete) and product listings.
Who:   Called by the /api/products route handlers.

Listing responses also carry `categories`: the sorted distinct set of
non-empty product categories, which the frontend uses for its filter bar.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.config import settings
from burgerboots.models.product import Product
from burgerboots.schemas.product import (
    ProductCategoryListResponse,
    ProductDocument,
    ProductListResponse,
    ProductResponse,
)
from burgerboots.services.lifecycle import EntityLifecycle
from burgerboots.services.listing import ListingQueryEngine, product_filters
from burgerboots.services.media_store import MediaStore, media_store
from burgerboots.services.record_store import RecordStore

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "price", "quantity", "description", "category")


class ProductService(EntityLifecycle):
    """Stateless; one shared instance serves every request."""

    resource = "product"
    required_fields = ("name", "price", "quantity")

    def __init__(
        self,
        store: Optional[RecordStore[Product]] = None,
        media: Optional[MediaStore] = None,
        page_size: Optional[int] = None,
    ):
        super().__init__(
            store=store or RecordStore(Product, ProductDocument, "product"),
            media=media or media_store,
        )
        self.listing = ListingQueryEngine(
            self.store,
            default_limit=page_size or settings.product_page_size,
            filter_builder=product_filters,
            collection="products",
        )

    def normalize(self, fields: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
        return {
            name: value
            for name, value in fields.items()
            if name in PRODUCT_FIELDS and value is not None
        }

    def to_response(self, record: Product) -> ProductResponse:
        return ProductResponse.from_record(record)

    async def list_products(
        self,
        db: AsyncSession,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ProductListResponse:
        result = await self.listing.list(db, page, limit, search=search, category=category)
        categories = await self.store.distinct(db, Product.category)
        return ProductListResponse(
            products=[self.to_response(p) for p in result.items],
            pagination=result.pagination,
            categories=categories,
        )

    async def list_by_category(
        self,
        db: AsyncSession,
        category: str,
        page: Any = None,
        limit: Any = None,
    ) -> ProductCategoryListResponse:
        result = await self.listing.list(db, page, limit, category=category)
        return ProductCategoryListResponse(
            products=[self.to_response(p) for p in result.items],
            pagination=result.pagination,
            category=category,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
