"""
Burger Boots Backend — Media Route
====================================

What:  Serves stored images under the public media prefix (default /uploads),
       and reads multipart image fields into UploadedImage for the services.
Who:   <img> tags in the frontend request the `image` reference of a record.

Security:
    - Paths are resolved against the storage root; anything escaping it
      (../../etc/passwd) or naming an in-progress ".part" file is a 404
    - Only files written by MediaStore live under the root
"""

import logging
from typing import Optional

from fastapi import APIRouter, UploadFile
from fastapi.responses import FileResponse

from burgerboots.config import settings
from burgerboots.exceptions import NotFoundError
from burgerboots.services.media_store import UploadedImage, media_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.media_url_prefix, tags=["Media"])


@router.get(
    "/{file_path:path}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found"},
    },
)
async def serve_file(file_path: str) -> FileResponse:
    path = media_store.resolve(file_path)
    if path is None or not path.is_file():
        raise NotFoundError(resource="file", resource_id=file_path)

    # media_type is guessed from the extension
    return FileResponse(
        path=str(path),
        headers={"Cache-Control": "public, max-age=86400"},
    )


async def read_upload(file: Optional[UploadFile]) -> Optional[UploadedImage]:
    """
    Reads an optional multipart image field.

    Returns None when no file was chosen (browsers send an empty filename).
    Extension and declared size are checked before the body is read into memory.
    """
    if file is None or not file.filename:
        return None
    try:
        media_store.validate_extension(file.filename)
        media_store.validate_size(file.size, 0)
        content = await file.read()
    finally:
        await file.close()

    logger.info("Received upload: filename=%s, size=%d bytes", file.filename, len(content))
    return UploadedImage(filename=file.filename, content=content, declared_size=file.size)
