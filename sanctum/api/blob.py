"""Blob upload API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from sanctum.api.dependencies import get_current_user
from sanctum.exceptions import PayloadTooLargeError, ValidationError
from sanctum.models.enums import TrackType
from sanctum.models.user import User
from sanctum.schemas.blob import UploadResponse
from sanctum.services import track_service
from sanctum.services.blob_storage import (
    BlobStorage,
    build_blob_path,
    get_blob_storage,
    sanitize_filename,
)
from sanctum.services.track_service import (
    is_allowed_mime_type,
    normalize_mime_type,
    validate_track_type,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blob", tags=["blob"])

READ_CHUNK_SIZE = 1024 * 1024


async def read_limited(upload: UploadFile, limit: int) -> bytes:
    """Read an upload, refusing to buffer more than limit bytes."""
    chunks = []
    total = 0
    while chunk := await upload.read(READ_CHUNK_SIZE):
        total += len(chunk)
        if total > limit:
            raise PayloadTooLargeError("File size too large (max 50MB)")
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/direct-upload", response_model=UploadResponse)
async def direct_upload(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    blob_storage: Annotated[BlobStorage, Depends(get_blob_storage)],
):
    """Store an uploaded audio file and return its URL."""
    if "multipart/form-data" not in request.headers.get("content-type", ""):
        raise ValidationError("Content-Type must be multipart/form-data")

    form = await request.form()
    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile) or not upload.filename:
            raise ValidationError("No file found in upload")

        track_type = validate_track_type(str(form.get("type") or TrackType.AMBIENT.value))
        if not is_allowed_mime_type(upload.content_type):
            raise ValidationError("Invalid file type. Only audio files are allowed.")
        mime_type = normalize_mime_type(upload.content_type)

        data = await read_limited(upload, track_service.MAX_FILE_SIZE)
        pathname = build_blob_path(current_user.id, track_type, upload.filename)
        logger.info(f"Uploading {pathname} for user {current_user.id}, size: {len(data)} bytes")

        stored = await blob_storage.put(pathname, data, mime_type)
    finally:
        await form.close()

    return UploadResponse(
        url=stored.url,
        filename=sanitize_filename(upload.filename),
        pathname=stored.pathname,
        file_size=stored.size,
        mime_type=mime_type,
    )
