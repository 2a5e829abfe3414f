"""
Burger Boots Backend — Application Package Initializer
======================================================

What: Marks the `burgerboots` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn burgerboots.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows the same layering for products and blog posts:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Lifecycle + Listing)    │  ← Validation, orchestration
    ├─────────────────────────────────────┤
    │  Record Store  │   Media Store      │  ← ORM writes / files on disk
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the database or the file system directly; services
    never see HTTP request objects.
"""

__version__ = "1.0.0"
