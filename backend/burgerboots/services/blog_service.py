"""
Burger Boots Backend — Blog Service
=====================================

What:  Blog post lifecycle and blog listings.
Who:   Called by the /api/blogs route handlers.

Configuration injected at construction (never read from literals here):
    categories      — the valid category set, loaded once at startup
    default_author  — stored when a post is submitted without an author

Form Normalization:
    tags     — repeated form fields and/or comma-separated values,
               trimmed, blanks dropped: ["a, b", "c"] → ["a", "b", "c"]
    featured — usual boolean spellings; an empty value means False
    author   — blank or absent on create → default author; on update only
               when the field is sent (blank → default author again)
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.config import settings
from burgerboots.exceptions import InvalidCategoryError
from burgerboots.models.blog import Blog
from burgerboots.schemas.blog import (
    BlogCategoriesResponse,
    BlogDocument,
    BlogListResponse,
    BlogResponse,
)
from burgerboots.services.lifecycle import EntityLifecycle, is_blank
from burgerboots.services.listing import ListingQueryEngine, blog_filters
from burgerboots.services.media_store import MediaStore, media_store
from burgerboots.services.record_store import RecordStore

logger = logging.getLogger(__name__)

BLOG_FIELDS = ("title", "body", "author", "tags", "category", "featured")


def normalize_tags(value: Any) -> List[str]:
    """Splits comma-separated entries and trims each tag; blanks are dropped."""
    if value is None:
        return []
    entries: Iterable[Any] = [value] if isinstance(value, str) else value
    tags = []
    for entry in entries:
        for part in str(entry).split(","):
            tag = part.strip()
            if tag:
                tags.append(tag)
    return tags


class BlogService(EntityLifecycle):
    """Stateless apart from its immutable configuration."""

    resource = "blog"
    required_fields = ("title", "body", "category")

    def __init__(
        self,
        categories: Optional[Sequence[str]] = None,
        default_author: Optional[str] = None,
        store: Optional[RecordStore[Blog]] = None,
        media: Optional[MediaStore] = None,
        page_size: Optional[int] = None,
    ):
        self.categories = tuple(categories or settings.blog_categories_list)
        self.default_author = default_author or settings.default_blog_author
        super().__init__(
            store=store
            or RecordStore(
                Blog,
                BlogDocument,
                "blog",
                validation_context={"categories": self.categories},
            ),
            media=media or media_store,
        )
        self.listing = ListingQueryEngine(
            self.store,
            default_limit=page_size or settings.blog_page_size,
            filter_builder=blog_filters,
            collection="blogs",
        )

    def normalize(self, fields: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
        doc = {
            name: value
            for name, value in fields.items()
            if name in BLOG_FIELDS and value is not None
        }
        if "tags" in doc:
            doc["tags"] = normalize_tags(doc["tags"])
        if doc.get("featured") == "":
            doc["featured"] = False
        if creating or "author" in doc:
            if is_blank(doc.get("author")):
                doc["author"] = self.default_author
        if creating:
            doc.setdefault("tags", [])
        return doc

    def check(self, doc: Mapping[str, Any], creating: bool) -> None:
        category = doc.get("category")
        if is_blank(category):
            # Absent on update means "unchanged"; blank is reported by validation
            return
        if str(category).strip() not in self.categories:
            raise InvalidCategoryError(
                category=str(category).strip(),
                valid_categories=self.categories,
            )

    def to_response(self, record: Blog) -> BlogResponse:
        return BlogResponse.from_record(record)

    def list_categories(self) -> BlogCategoriesResponse:
        return BlogCategoriesResponse(categories=list(self.categories))

    async def list_blogs(
        self,
        db: AsyncSession,
        page: Any = None,
        limit: Any = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> BlogListResponse:
        result = await self.listing.list(db, page, limit, search=search, category=category)
        return BlogListResponse(
            blogs=[self.to_response(b) for b in result.items],
            pagination=result.pagination,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
blog_service = BlogService()
