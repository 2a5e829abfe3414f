"""
Burger Boots Backend — Product SQLAlchemy Model
=================================================

What:  ORM model representing the `products` table.
Who:   Used by the product record store for CRUD and by Alembic.

Table Design Rationale:
    - name / description: stored already trimmed; length ceilings mirror the
      validation schema so a bypassed validator still hits a DB constraint
    - price: float, 0–10000 inclusive (enforced by validation)
    - category: optional free text, '' when unset; used by category listings
    - image: public reference ("/uploads/<file>"), '' means no image

    Index on (created_at DESC, id):
        Every listing orders by newest first with id as the tie-breaker
"""

from sqlalchemy import Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from burgerboots.database import Base
from burgerboots.models.base import RecordMixin


class Product(RecordMixin, Base):
    """
    A product offered in the shop.

    Lifecycle:
        absent → create → persisted → (update)* → delete → absent
        Deleting a product does not delete its image file.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Product name, trimmed, max 100 chars",
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Unit price, 0 to 10000 inclusive",
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Units in stock, never negative",
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        comment="Optional description, max 500 chars",
    )

    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="",
        comment="Optional category label used by listing filters",
    )

    image: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        comment="Public media reference, empty when no image",
    )

    __table_args__ = (
        Index("idx_products_created_at", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
