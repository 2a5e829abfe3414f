"""
Burger Boots Backend — Blog SQLAlchemy Models
===============================================

What:  ORM models for the `blogs` table and its ordered `blog_tags` children.

Why tags are rows:
    Listing search has to match "any tag" case-insensitively. With one row per
    tag that is a plain EXISTS subquery on every dialect, instead of string
    matching against a serialized array.

    `Blog.tags` is an association proxy over the ordered children, so callers
    read and assign a plain list of strings:
        blog.tags = ["burgers", "spicy"]
"""

import uuid
from typing import List

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from burgerboots.database import Base
from burgerboots.models.base import RecordMixin


class BlogTag(Base):
    """One tag of a blog post; `position` keeps the author's order."""

    __tablename__ = "blog_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    blog_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<BlogTag(blog_id={self.blog_id}, position={self.position}, value='{self.value}')>"


class Blog(RecordMixin, Base):
    """
    A blog post.

    Query Patterns:
        - List newest first: ORDER BY created_at DESC, id ASC
        - Category filter: WHERE category = :category (exact)
        - Search: title/body ILIKE or EXISTS tag ILIKE
    """

    __tablename__ = "blogs"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # selectin: tags are loaded with the parent query (no lazy IO under asyncio)
    tag_items: Mapped[List[BlogTag]] = relationship(
        BlogTag,
        order_by=BlogTag.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    tags: AssociationProxy[List[str]] = association_proxy(
        "tag_items",
        "value",
        creator=lambda value: BlogTag(value=value),
    )

    __table_args__ = (
        Index("idx_blogs_created_at", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', category='{self.category}')>"
