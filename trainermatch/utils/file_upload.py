"""
File Upload Utility - store uploaded images on local disk.

Supported formats:
- JPEG (.jpg, .jpeg)
- PNG (.png)
- GIF (.gif)
- WebP (.webp)

Max file size: MAX_UPLOAD_SIZE_MB from settings (default 5MB)
"""

import logging
import os
import uuid

from fastapi import UploadFile, HTTPException

from trainermatch.core.config import get_settings
from trainermatch.schemas.schemas import UploadResponse

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def save_image_upload(file: UploadFile) -> UploadResponse:
    """
    Validate and store an uploaded image.

    Args:
        file: FastAPI UploadFile

    Returns:
        UploadResponse with the public URL of the stored file

    Raises:
        HTTPException on validation errors
    """
    settings = get_settings()

    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}"
        )

    content = await file.read()

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_size_mb}MB"
        )

    # Stored under a random name; the client's filename is only echoed back
    stored_name = f"{uuid.uuid4().hex}{ext}"
    os.makedirs(settings.upload_dir, exist_ok=True)
    with open(os.path.join(settings.upload_dir, stored_name), "wb") as out:
        out.write(content)

    logger.info("Stored upload %s (%d bytes)", stored_name, len(content))
    return UploadResponse(
        url=f"{settings.upload_base_url.rstrip('/')}/{stored_name}",
        filename=file.filename,
        size=len(content),
        content_type=file.content_type,
    )
