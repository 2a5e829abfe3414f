"""
Burger Boots Backend — Record Store
=====================================

What:  Validated persistence for one entity type (products or blogs).
How:   Every insert and update runs the entity's pydantic document schema;
       writes go through the request's AsyncSession (flush here, commit in
       get_db_session).
Who:   Used by the lifecycle services and the listing engine.

Operations:
    insert(db, doc)              → record            | ValidationError
    find_by_id(db, id)           → record            | NotFoundError
    update(db, id, partial)      → record            | NotFoundError | ValidationError
    delete(db, id)               → id                | NotFoundError
    query(db, filters, skip, n)  → (records, total)
    distinct(db, column)         → sorted non-empty values

Update policy:
    Field-level merge. Only keys present in `partial` change; the merged
    document is validated as a whole, so an update can never leave a record
    in a state an insert would have rejected.

Ordering:
    created_at DESC, then id ASC. Timestamps can collide; the id tie-break
    gives a total order, so consecutive pages never repeat or skip a record.

Failure mapping:
    timeouts / connectivity  → ServiceUnavailableError (503)
    other SQLAlchemy errors  → DatabaseError (500, generic message)
"""

import asyncio
import logging
import uuid
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import distinct, func, select
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.exceptions import (
    BurgerBootsError,
    DatabaseError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from burgerboots.models.base import utcnow
from burgerboots.schemas.common import field_errors

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Largest OFFSET a 64-bit SQL integer can carry
MAX_SQL_OFFSET = 2**63 - 1

UNAVAILABLE_ERRORS = (
    asyncio.TimeoutError,
    OSError,
    sa_exc.TimeoutError,
    sa_exc.OperationalError,
)


class RecordStore(Generic[ModelT]):
    """
    Document-style store for one ORM model.

    Args:
        model: SQLAlchemy model class (must carry id/created_at/updated_at)
        document_schema: pydantic schema describing a complete valid document
        resource: Human-readable name used in error messages ("product")
        validation_context: Passed to the schema (e.g. the blog category set)
    """

    def __init__(
        self,
        model: Type[ModelT],
        document_schema: Type[BaseModel],
        resource: str,
        validation_context: Optional[Mapping[str, Any]] = None,
    ):
        self.model = model
        self.document_schema = document_schema
        self.resource = resource
        self.validation_context = dict(validation_context or {})

    # ── Validation ────────────────────────────────────────────────────────

    def validate(self, doc: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validates a complete document and returns its normalized values.

        Raises:
            ValidationError listing every violated field.
        """
        try:
            validated = self.document_schema.model_validate(
                dict(doc), context=self.validation_context
            )
        except PydanticValidationError as e:
            errors = field_errors(e.errors())
            logger.info("%s validation failed: %s", self.resource, errors)
            raise ValidationError(
                message=f"{self.resource.capitalize()} validation failed",
                errors=errors,
            )
        return validated.model_dump()

    def snapshot(self, record: ModelT) -> Dict[str, Any]:
        """Current document values of a stored record (collections as lists)."""
        values = {}
        for name in self.document_schema.model_fields:
            value = getattr(record, name)
            if not isinstance(value, (str, bytes)) and isinstance(value, Iterable):
                value = list(value)
            values[name] = value
        return values

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, db: AsyncSession, doc: Mapping[str, Any]) -> ModelT:
        values = self.validate(doc)
        record = self.model(**values)
        with self._guard("insert"):
            db.add(record)
            await db.flush()
            # Loads child collections eagerly; lazy loads cannot run under asyncio
            await db.refresh(record)
        logger.info("%s created: %s", self.resource.capitalize(), record.id)
        return record

    async def update(
        self, db: AsyncSession, record_id: Any, partial: Mapping[str, Any]
    ) -> ModelT:
        record = await self.find_by_id(db, record_id)
        merged = {**self.snapshot(record), **partial}
        values = self.validate(merged)

        for name in partial:
            if name in values:
                setattr(record, name, values[name])
        record.updated_at = utcnow()

        with self._guard("update"):
            await db.flush()
            await db.refresh(record)
        logger.info(
            "%s updated: %s (fields: %s)",
            self.resource.capitalize(),
            record.id,
            ", ".join(sorted(partial)) or "none",
        )
        return record

    async def delete(self, db: AsyncSession, record_id: Any) -> str:
        record = await self.find_by_id(db, record_id)
        deleted_id = str(record.id)
        with self._guard("delete"):
            await db.delete(record)
            await db.flush()
        logger.info("%s deleted: %s", self.resource.capitalize(), deleted_id)
        return deleted_id

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(self, db: AsyncSession, record_id: Any) -> ModelT:
        """
        Raises:
            NotFoundError for unknown ids and for strings that are not UUIDs.
        """
        parsed = self.parse_id(record_id)
        if parsed is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        with self._guard("find_by_id"):
            record = await db.get(self.model, parsed)
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        return record

    async def query(
        self,
        db: AsyncSession,
        filters: Sequence[Any],
        skip: int,
        limit: int,
    ) -> Tuple[List[ModelT], int]:
        """
        One page of records matching all `filters` plus the total match count.

        `skip` is not clamped: past the last match the page is simply empty.
        An offset no database integer can hold only runs the count.
        """
        model = self.model
        count_stmt = select(func.count()).select_from(model).where(*filters)
        if skip > MAX_SQL_OFFSET:
            with self._guard("query"):
                total = (await db.execute(count_stmt)).scalar_one()
            return [], int(total or 0)

        page_stmt = (
            select(model)
            .where(*filters)
            .order_by(model.created_at.desc(), model.id.asc())
            .offset(skip)
            .limit(limit)
        )
        with self._guard("query"):
            records = list((await db.execute(page_stmt)).scalars().all())
            total = (await db.execute(count_stmt)).scalar_one()
        return records, int(total or 0)

    async def distinct(self, db: AsyncSession, column: Any) -> List[str]:
        """Sorted distinct non-empty values of a string column."""
        stmt = select(distinct(column)).where(column != "").order_by(column)
        with self._guard("distinct"):
            result = await db.execute(stmt)
        return [value for value in result.scalars().all() if value]

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def parse_id(record_id: Any) -> Optional[uuid.UUID]:
        if isinstance(record_id, uuid.UUID):
            return record_id
        try:
            return uuid.UUID(str(record_id))
        except (TypeError, ValueError):
            return None

    @contextmanager
    def _guard(self, operation: str):
        """Translates driver/ORM failures into application exceptions."""
        try:
            yield
        except BurgerBootsError:
            raise
        except UNAVAILABLE_ERRORS as e:
            logger.error("%s %s: store unavailable: %s", self.resource, operation, str(e))
            raise ServiceUnavailableError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e
        except sa_exc.SQLAlchemyError as e:
            logger.error(
                "%s %s: database error: %s", self.resource, operation, str(e), exc_info=True
            )
            raise DatabaseError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e
