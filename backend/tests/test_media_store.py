"""
Burger Boots Backend — Media Store Unit Tests
===============================================

What:  Tests for MediaStore validation, naming, atomic writes and path resolution.
How:   Every test gets its own storage directory (temp_storage fixture).

Test Strategy:
    ✅ Allowed extensions (.jpg, .jpeg, .png, .webp), case-insensitive
    ✅ Rejected extensions (.gif, .pdf, none) → 415
    ✅ Size ceiling (declared and actual) → 413
    ✅ Unique names for identical concurrent uploads
    ✅ Failed writes leave no partial file behind
    ✅ Path traversal and temp files are never resolved
"""

import asyncio
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from burgerboots.exceptions import (
    PayloadTooLargeError,
    StorageWriteError,
    UnsupportedMediaTypeError,
)
from burgerboots.services.media_store import (
    TEMP_SUFFIX,
    MediaStore,
    UploadedImage,
    media_reference,
)


class TestExtensionValidation:
    """Tests for the image extension allow-list."""

    def setup_method(self):
        self.store = MediaStore(storage_root=None)

    @pytest.mark.parametrize("filename", ["photo.jpg", "photo.jpeg", "photo.png", "photo.webp"])
    def test_allowed_extensions(self, filename):
        assert self.store.validate_extension(filename) == Path(filename).suffix

    def test_extension_is_case_insensitive(self):
        assert self.store.validate_extension("photo.JPG") == ".jpg"
        assert self.store.validate_extension("photo.Jpeg") == ".jpeg"
        assert self.store.validate_extension("photo.PNG") == ".png"

    @pytest.mark.parametrize("filename", ["animation.gif", "document.pdf", "malware.exe", "noextension"])
    def test_rejected_extensions(self, filename):
        with pytest.raises(UnsupportedMediaTypeError, match="not supported") as exc_info:
            self.store.validate_extension(filename)
        assert exc_info.value.status_code == 415
        assert "png" in exc_info.value.payload()["allowedTypes"]


class TestSizeValidation:
    """Declared size is checked first, then the actual byte count."""

    def test_within_limit(self, temp_storage):
        store = MediaStore(storage_root=temp_storage, max_file_size=2048)
        store.validate_size(None, 2048)

    def test_actual_size_over_limit(self, temp_storage):
        store = MediaStore(storage_root=temp_storage, max_file_size=2048)
        with pytest.raises(PayloadTooLargeError, match="exceeds maximum") as exc_info:
            store.validate_size(None, 2049)
        assert exc_info.value.status_code == 413
        assert exc_info.value.payload() == {"maxSize": 2048}

    def test_declared_size_over_limit(self, temp_storage):
        store = MediaStore(storage_root=temp_storage, max_file_size=2048)
        with pytest.raises(PayloadTooLargeError):
            store.validate_size(10_000, 0)


class TestStore:
    """Tests for MediaStore.store() and the files it leaves on disk."""

    async def test_store_writes_file(self, temp_storage, sample_image_bytes):
        store = MediaStore(storage_root=temp_storage)
        name = await store.store(UploadedImage("burger.JPG", sample_image_bytes))

        assert name.endswith(".jpg")
        assert (Path(temp_storage) / name).read_bytes() == sample_image_bytes
        assert store.exists(name)

    async def test_store_rejects_before_writing(self, temp_storage):
        store = MediaStore(storage_root=temp_storage, max_file_size=1024)

        with pytest.raises(UnsupportedMediaTypeError):
            await store.store(UploadedImage("clip.gif", b"GIF89a"))
        with pytest.raises(PayloadTooLargeError):
            await store.store(UploadedImage("big.png", b"x" * 1025))

        assert os.listdir(temp_storage) == []

    async def test_identical_concurrent_uploads_get_distinct_names(self, temp_storage, sample_image_bytes):
        store = MediaStore(storage_root=temp_storage)
        uploads = [UploadedImage("same.png", sample_image_bytes) for _ in range(5)]

        names = await asyncio.gather(*(store.store(u) for u in uploads))

        assert len(set(names)) == 5
        assert sorted(os.listdir(temp_storage)) == sorted(names)

    async def test_failed_write_leaves_no_partial_file(self, temp_storage, sample_image_bytes):
        store = MediaStore(storage_root=temp_storage)

        with patch(
            "burgerboots.services.media_store.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StorageWriteError) as exc_info:
                await store.store(UploadedImage("burger.jpg", sample_image_bytes))

        assert exc_info.value.status_code == 500
        assert "disk full" not in exc_info.value.message
        assert os.listdir(temp_storage) == []

    async def test_cleanup_removes_file(self, temp_storage, sample_image_bytes):
        store = MediaStore(storage_root=temp_storage)
        name = await store.store(UploadedImage("burger.webp", sample_image_bytes))

        await store.cleanup(name)
        await store.cleanup(name)  # already gone: no error

        assert not store.exists(name)

    def test_storage_root_bootstrap_is_idempotent(self, tmp_path):
        root = tmp_path / "nested" / "uploads"
        store = MediaStore(storage_root=str(root))
        store.ensure_storage_root()
        MediaStore(storage_root=str(root))

        assert root.is_dir()

    def test_generated_names_keep_extension(self):
        name = MediaStore.generate_filename(".png")
        stamp, rest = name.split("-", 1)

        assert stamp.isdigit()
        assert rest.endswith(".png")
        assert len(rest) == len("0123456789abcdef.png")


class TestResolve:
    """Only finished files inside the storage root are ever resolved."""

    def test_traversal_is_rejected(self, temp_storage):
        store = MediaStore(storage_root=temp_storage)
        assert store.resolve("../../etc/passwd") is None
        assert store.resolve("../storage_sibling.jpg") is None

    def test_temp_files_are_hidden(self, temp_storage):
        store = MediaStore(storage_root=temp_storage)
        (Path(temp_storage) / f".abc.jpg{TEMP_SUFFIX}").write_bytes(b"partial")

        assert store.resolve(f".abc.jpg{TEMP_SUFFIX}") is None
        assert not store.exists(f".abc.jpg{TEMP_SUFFIX}")

    def test_resolves_inside_root(self, temp_storage):
        store = MediaStore(storage_root=temp_storage)
        assert store.resolve("photo.jpg") == Path(temp_storage).resolve() / "photo.jpg"


def test_media_reference_uses_public_prefix():
    assert media_reference("123-abc.jpg") == "/uploads/123-abc.jpg"
