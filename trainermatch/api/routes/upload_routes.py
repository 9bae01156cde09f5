"""
Upload Routes

POST /uploads/image - Upload an image (multipart field `file`)
"""

from fastapi import APIRouter, Depends, File, UploadFile

from trainermatch.core.auth import get_current_user
from trainermatch.utils.file_upload import save_image_upload
from trainermatch.schemas.schemas import UploadResponse

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("/image", response_model=UploadResponse, status_code=201)
async def upload_image(file: UploadFile = File(...), user: dict = Depends(get_current_user)):
    """
    Store an image and return its public URL.

    Allowed: JPG, PNG, GIF, WEBP. Size limit from MAX_UPLOAD_SIZE_MB.
    """
    return await save_image_upload(file)
