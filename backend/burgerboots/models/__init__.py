"""
Burger Boots Backend — ORM Models
===================================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and by the test fixtures' create_all).
"""

from burgerboots.models.base import RecordMixin, utcnow
from burgerboots.models.blog import Blog, BlogTag
from burgerboots.models.product import Product

__all__ = ["Blog", "BlogTag", "Product", "RecordMixin", "utcnow"]
