"""
Burger Boots Backend — Entity Lifecycle (shared create/read/update/delete)
===========================================================================

What:  The orchestration every entity shares: required-field checks, image
       upload, validated persistence, not-found handling.
Who:   Subclassed by ProductService and BlogService, which supply the
       field normalization and any extra checks (blog categories).

State machine per record:
    {absent} → create → {persisted} → (update)* → {persisted} → delete → {absent}

Create / Update Flow:
    ┌───────────┐   ┌──────────────┐   ┌──────────────┐   ┌──────────────┐
    │ Normalize │──▶│ Check fields │──▶│ Store image  │──▶│ Insert/Update│
    │ form data │   │ + validate   │   │ (MediaStore) │   │ (RecordStore)│
    └───────────┘   └──────────────┘   └──────────────┘   └──────────────┘

    The document is validated before the image is written, so a bad price
    never leaves a file behind. If the record write still fails, the freshly
    stored file is removed again.

Known gaps (accepted):
    - Replacing or deleting a record keeps the old image file.
    - Concurrent updates to one record: last write wins.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from burgerboots.exceptions import MissingRequiredFieldError
from burgerboots.schemas.common import DeleteResponse
from burgerboots.services.media_store import MediaStore, UploadedImage, media_reference
from burgerboots.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EntityLifecycle:
    """
    Base lifecycle controller.

    Subclasses set `resource` and `required_fields` and implement `normalize`.
    """

    resource: str = "record"
    required_fields: Tuple[str, ...] = ()

    def __init__(self, store: RecordStore, media: MediaStore):
        self.store = store
        self.media = media

    # ── Hooks ─────────────────────────────────────────────────────────────

    def normalize(self, fields: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
        """Turns submitted form fields into document values. Drops absent (None) fields."""
        return {name: value for name, value in fields.items() if value is not None}

    def check(self, doc: Mapping[str, Any], creating: bool) -> None:
        """Entity-specific checks that run after required fields, before validation."""

    def to_response(self, record: Any) -> Any:
        raise NotImplementedError

    # ── Operations ────────────────────────────────────────────────────────

    async def create(
        self,
        db: AsyncSession,
        fields: Mapping[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Any:
        doc = self.normalize(fields, creating=True)

        missing = [name for name in self.required_fields if is_blank(doc.get(name))]
        if missing:
            raise MissingRequiredFieldError(missing, context={"resource": self.resource})

        self.check(doc, creating=True)
        self.store.validate(doc)

        record = await self._write_with_image(
            image, doc, lambda values: self.store.insert(db, values)
        )
        return self.to_response(record)

    async def get(self, db: AsyncSession, record_id: str) -> Any:
        record = await self.store.find_by_id(db, record_id)
        return self.to_response(record)

    async def update(
        self,
        db: AsyncSession,
        record_id: str,
        fields: Mapping[str, Any],
        image: Optional[UploadedImage] = None,
    ) -> Any:
        partial = self.normalize(fields, creating=False)

        # Not-found and validation both surface before any file is written
        record = await self.store.find_by_id(db, record_id)
        self.check(partial, creating=False)
        self.store.validate({**self.store.snapshot(record), **partial})

        record = await self._write_with_image(
            image, partial, lambda values: self.store.update(db, record_id, values)
        )
        return self.to_response(record)

    async def delete(self, db: AsyncSession, record_id: str) -> DeleteResponse:
        deleted_id = await self.store.delete(db, record_id)
        return DeleteResponse(
            message=f"{self.resource.capitalize()} deleted successfully",
            id=deleted_id,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _write_with_image(self, image: Optional[UploadedImage], values: Dict[str, Any], write):
        stored: Optional[str] = None
        if image is not None:
            stored = await self.media.store(image)
            values["image"] = media_reference(stored)

        try:
            return await write(values)
        except Exception:
            if stored:
                logger.warning(
                    "%s write failed; removing uploaded file %s", self.resource, stored
                )
                await self.media.cleanup(stored)
            raise
