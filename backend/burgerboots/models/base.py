"""
Burger Boots Backend — Shared Record Columns
==============================================

What:  Identifier and timestamp columns every stored record carries.
Why:   Clients never set these; the store assigns them on insert and
       refreshes `updated_at` on every mutation.

Column types are dialect-neutral (Uuid, and UTCDateTime over DateTime with
timezone) so the same models run on PostgreSQL and on SQLite in tests.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetimes on every dialect.

    SQLite has no timezone storage and returns naive values; they are read
    back as UTC. Aware values are converted to UTC before binding.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class RecordMixin:
    """
    Server-assigned identity and timestamps.

    Python-side defaults (not server_default) so every dialect receives the
    same UTC values in the INSERT itself.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Server-assigned identifier",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When the record was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="When the record was last modified (UTC)",
    )
