"""
Burger Boots Backend — Listing Query Engine
=============================================

What:  Turns raw page/limit/filter query parameters into a record store
       query and returns one page plus pagination metadata.
Who:   Used by the product and blog services for every listing endpoint.

Pagination Strategy (offset-based):
    offset = (page - 1) * limit, never clamped to the result size.
    A page past the end is not an error: it comes back empty with
    hasNext = false, and hasPrev = (page > 1).

    total_pages = ceil(total_items / limit), and 0 when nothing matches.

Parameter parsing:
    Query values arrive as strings. Absent or non-integer values fall back to
    the defaults (page 1, per-entity limit). Integers below 1 are rejected
    with InvalidPaginationError. A limit above `settings.max_page_size` is
    clamped to it.

Filtering policies:
    Products: a non-empty search is an EXACT, case-insensitive name match
              ("Bacon Burger" does not match "Bacon Burger Deluxe"). Only when
              there is no search, a non-empty category matches as a
              case-insensitive substring.
    Blogs:    search is a case-insensitive substring of title OR body OR any
              tag; category is an exact match; both combine with AND.

    User input is matched literally: LIKE wildcards (% and _) are escaped.

Concurrency:
    The engine holds no per-request state; each call builds its own query.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.config import settings
from burgerboots.exceptions import InvalidPaginationError
from burgerboots.models.blog import Blog, BlogTag
from burgerboots.models.product import Product
from burgerboots.schemas.common import PaginationResponse
from burgerboots.services.record_store import RecordStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ListingPage(Generic[ModelT]):
    items: List[ModelT]
    pagination: PaginationResponse


def _parse_int(value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def parse_page_request(
    page: Any,
    limit: Any,
    default_limit: int,
    collection: str = "items",
    max_limit: Optional[int] = None,
) -> PageRequest:
    """
    Parses raw page/limit values.

    >>> parse_page_request(None, "abc", 6)
    PageRequest(page=1, limit=6)

    Raises:
        InvalidPaginationError when page < 1 or limit < 1.
    """
    parsed_page = _parse_int(page, 1)
    parsed_limit = _parse_int(limit, default_limit)

    if parsed_page < 1 or parsed_limit < 1:
        raise InvalidPaginationError(
            message="Page and limit must be positive integers",
            collection=collection,
            context={"page": page, "limit": limit},
        )
    ceiling = max_limit or settings.max_page_size
    return PageRequest(page=parsed_page, limit=min(parsed_limit, ceiling))


def build_pagination(request: PageRequest, total_items: int) -> PaginationResponse:
    total_pages = math.ceil(total_items / request.limit) if total_items > 0 else 0
    return PaginationResponse(
        current_page=request.page,
        total_pages=total_pages,
        total_items=total_items,
        has_next=request.page < total_pages,
        has_prev=request.page > 1,
    )


def _clean(term: Optional[str]) -> str:
    return (term or "").strip()


def like_pattern(term: str) -> str:
    """'%term%' with the term's own LIKE wildcards escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


# ══════════════════════════════════════════════════════════════════════════
# Filter Builders
# ══════════════════════════════════════════════════════════════════════════


def product_filters(search: Optional[str] = None, category: Optional[str] = None) -> List[Any]:
    """Search wins over category; the two are never combined."""
    term = _clean(search)
    if term:
        return [func.lower(Product.name) == term.lower()]
    wanted = _clean(category)
    if wanted:
        return [Product.category.ilike(like_pattern(wanted), escape=LIKE_ESCAPE)]
    return []


def blog_filters(search: Optional[str] = None, category: Optional[str] = None) -> List[Any]:
    filters: List[Any] = []
    wanted = _clean(category)
    if wanted:
        filters.append(Blog.category == wanted)
    term = _clean(search)
    if term:
        pattern = like_pattern(term)
        filters.append(
            or_(
                Blog.title.ilike(pattern, escape=LIKE_ESCAPE),
                Blog.body.ilike(pattern, escape=LIKE_ESCAPE),
                Blog.tag_items.any(BlogTag.value.ilike(pattern, escape=LIKE_ESCAPE)),
            )
        )
    return filters


# ══════════════════════════════════════════════════════════════════════════
# Engine
# ══════════════════════════════════════════════════════════════════════════


class ListingQueryEngine(Generic[ModelT]):
    """
    Paginated, filtered reads over one record store.

    Args:
        store: The record store to query
        default_limit: Page size when the client sends none
        filter_builder: Maps keyword filters to SQLAlchemy clauses
        collection: Response key for the items ("products", "blogs"), used
                    for the empty listing on pagination errors
    """

    def __init__(
        self,
        store: RecordStore[ModelT],
        default_limit: int,
        filter_builder: Callable[..., Sequence[Any]],
        collection: str,
    ):
        self.store = store
        self.default_limit = default_limit
        self.filter_builder = filter_builder
        self.collection = collection

    async def list(
        self,
        db: AsyncSession,
        page: Any = None,
        limit: Any = None,
        **filters: Optional[str],
    ) -> ListingPage[ModelT]:
        request = parse_page_request(page, limit, self.default_limit, self.collection)
        clauses = self.filter_builder(**filters)

        logger.info(
            "Listing %s: page=%d limit=%d filters=%s",
            self.collection,
            request.page,
            request.limit,
            {k: v for k, v in filters.items() if v},
        )

        items, total = await self.store.query(
            db, clauses, skip=request.offset, limit=request.limit
        )
        return ListingPage(items=items, pagination=build_pagination(request, total))
