"""
Burger Boots Backend — Media Store
====================================

What:  Accepts uploaded images, stores them under the storage root with a
       collision-resistant name, and returns the path relative to that root.
How:   Validates extension and size, writes to a hidden temporary file,
       then atomically renames it into place.
Who:   Called by the product and blog services on create/update with an image.

The store knows nothing about HTTP. Callers turn the relative path into a
public reference with `settings.media_url_prefix` ("/uploads/<file>").

Upload Checks (in order, cheapest first):
    1. Extension allow-list (case-insensitive) → UnsupportedMediaTypeError
    2. Declared size, then actual byte count   → PayloadTooLargeError
    Nothing touches the disk until both pass.

Filename:
    <time_ns>-<16 hex chars>.<ext>
    The random part comes from `secrets` (64 bits), so two uploads in the same
    nanosecond still get different names.

All-or-nothing writes:
    Bytes go to ".<name>.part" and are moved with os.replace() only once
    fully written. A failed write removes the partial file and raises
    StorageWriteError, so no reference ever points at a truncated image.
"""

import logging
import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles

from burgerboots.config import settings
from burgerboots.exceptions import (
    PayloadTooLargeError,
    StorageWriteError,
    UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)

# What: Extensions accepted for product and blog images (lowercase, with dot)
ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".webp"})

TEMP_SUFFIX = ".part"


@dataclass(frozen=True)
class UploadedImage:
    """An image received from a client, already read into memory."""

    filename: str
    content: bytes
    declared_size: Optional[int] = None


class MediaStore:
    """
    Manages image storage on the local file system.

    Directory Structure:
        uploads/
        ├── 1718000000000000000-9f2c4e1a7b3d5c60.jpg
        └── 1718000000123456789-0a1b2c3d4e5f6071.webp

    Flat on purpose: the stored reference maps 1:1 onto a URL under
    the public media prefix.
    """

    def __init__(self, storage_root: Optional[str] = None, max_file_size: Optional[int] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
            max_file_size: Override the configured size ceiling in bytes.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.max_file_size = max_file_size or settings.max_file_size
        self.ensure_storage_root()
        logger.info("MediaStore initialized with storage_root=%s", self.storage_root)

    def ensure_storage_root(self) -> None:
        """Create-if-missing; safe when another worker created it first."""
        self.storage_root.mkdir(parents=True, exist_ok=True)

    def validate_extension(self, filename: str) -> str:
        """
        Returns the normalized extension (lowercase with dot).

        Raises:
            UnsupportedMediaTypeError if the extension is not allowed.
        """
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise UnsupportedMediaTypeError(
                extension=ext,
                allowed=[e.lstrip(".") for e in ALLOWED_EXTENSIONS],
                context={"filename": filename},
            )
        return ext

    def validate_size(self, declared_size: Optional[int], actual_size: int) -> None:
        """
        Checks the declared size first (cheap, may be missing or wrong), then
        the actual byte count.

        Raises:
            PayloadTooLargeError when either exceeds the ceiling.
        """
        if declared_size and declared_size > self.max_file_size:
            raise PayloadTooLargeError(
                max_size=self.max_file_size,
                context={"declared_size": declared_size},
            )
        if actual_size > self.max_file_size:
            raise PayloadTooLargeError(
                max_size=self.max_file_size,
                context={"actual_size": actual_size},
            )

    @staticmethod
    def generate_filename(extension: str) -> str:
        return f"{time.time_ns()}-{secrets.token_hex(8)}{extension}"

    async def store(self, upload: UploadedImage) -> str:
        """
        Validate and persist an uploaded image.

        Returns:
            Path of the stored file relative to the storage root.

        Raises:
            UnsupportedMediaTypeError, PayloadTooLargeError: before any write
            StorageWriteError: the file could not be written completely
        """
        ext = self.validate_extension(upload.filename)
        self.validate_size(upload.declared_size, len(upload.content))

        name = self.generate_filename(ext)
        final_path = self.storage_root / name
        temp_path = self.storage_root / f".{name}{TEMP_SUFFIX}"

        try:
            self.ensure_storage_root()
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(upload.content)
            os.replace(temp_path, final_path)
        except OSError as e:
            logger.error("Failed to store file %s: %s", name, str(e))
            self._discard(temp_path)
            raise StorageWriteError(
                context={"path": str(final_path), "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", name, len(upload.content))
        return name

    def resolve(self, relative_path: str) -> Optional[Path]:
        """
        Maps a relative path onto the storage root.

        Returns None when the path escapes the root (e.g. "../../etc/passwd")
        or names a temporary file.
        """
        candidate = (self.storage_root / relative_path).resolve()
        if self.storage_root not in candidate.parents:
            return None
        if candidate.name.startswith(".") or candidate.name.endswith(TEMP_SUFFIX):
            return None
        return candidate

    def exists(self, relative_path: str) -> bool:
        path = self.resolve(relative_path)
        return path is not None and path.is_file()

    async def cleanup(self, relative_path: str) -> None:
        """
        Best-effort removal of a file stored for a request that then failed.

        Never raises: a leftover file is harmless, a masked original error is not.
        """
        path = self.resolve(relative_path)
        if path is None:
            return
        self._discard(path)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
            logger.debug("Removed file: %s", path.name)
        except OSError as e:
            logger.warning("Failed to remove file %s: %s", path.name, str(e))


def media_reference(relative_path: str) -> str:
    """Public reference stored on records: '/uploads/<relative_path>'."""
    return f"{settings.media_url_prefix}/{relative_path}"


# ── Singleton Instance ────────────────────────────────────────────────────
media_store = MediaStore()
