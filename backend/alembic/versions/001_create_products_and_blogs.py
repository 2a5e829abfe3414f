"""Create products, blogs and blog_tags tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Initial schema for the shop: products, blog posts, and the ordered
       tags of each post.
How:   Dialect-neutral column types (Uuid, DateTime with timezone) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns():
    return [
        sa.Column("id", sa.Uuid(), nullable=False, comment="Server-assigned identifier"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the record was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the record was last modified (UTC)",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "products",
        *_record_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("description", sa.String(500), nullable=False, server_default=sa.text("''")),
        sa.Column("category", sa.String(50), nullable=False, server_default=sa.text("''")),
        sa.Column("image", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
    )
    # Listing order: newest first, id as tie-breaker
    op.create_index("idx_products_created_at", "products", ["created_at", "id"])

    op.create_table(
        "blogs",
        *_record_columns(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("image", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_blogs_created_at", "blogs", ["created_at", "id"])
    op.create_index("ix_blogs_category", "blogs", ["category"])

    op.create_table(
        "blog_tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("blog_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("value", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["blog_id"], ["blogs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blog_tags_blog_id", "blog_tags", ["blog_id"])


def downgrade() -> None:
    op.drop_index("ix_blog_tags_blog_id", table_name="blog_tags")
    op.drop_table("blog_tags")
    op.drop_index("ix_blogs_category", table_name="blogs")
    op.drop_index("idx_blogs_created_at", table_name="blogs")
    op.drop_table("blogs")
    op.drop_index("idx_products_created_at", table_name="products")
    op.drop_table("products")
