# =============================================================================
# app/routers/upload.py - Profile Image Upload
# =============================================================================
# Validates the uploaded image and hands it to the upload pipeline.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Path, UploadFile
from starlette.concurrency import run_in_threadpool

from app.dependencies import SettingsDep, UploadServiceDep
from app.exceptions import FileTooLargeError, InvalidFileTypeError, InvalidFilenameError
from core.models.user import ProfileImageUploadResponse
from core.services.upload_service import build_storage_key
from lib.utils import base_filename

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{user_id}/profile-image", response_model=ProfileImageUploadResponse)
async def upload_profile_image(
    user_id: Annotated[str, Path(description="User id")],
    file: Annotated[UploadFile, File(description="Image file to upload")],
    settings: SettingsDep,
    uploads: UploadServiceDep,
):
    """
    Upload a profile image for a user.

    This endpoint:
    1. Validates the file (name, extension, declared size)
    2. Verifies the user exists
    3. Uploads the image to the Space with public-read access
    4. Stores the public URL on the user

    The object key is "{user_id}-{filename}", so uploading the same file
    name again replaces the previous image.
    """
    filename = base_filename(file.filename)
    if not filename:
        raise InvalidFilenameError(file.filename)

    file_ext = "." + filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if file_ext not in settings.allowed_extensions_list:
        raise InvalidFileTypeError(filename, settings.allowed_extensions_list)

    if file.size is not None and file.size > settings.max_upload_size_bytes:
        raise FileTooLargeError(file.size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    logger.info(f"Processing profile image upload: {filename} for user {user_id}")

    # The pipeline blocks on file, network and database I/O
    await run_in_threadpool(
        uploads.upload_profile_image,
        user_id,
        file.file,
        filename,
        file.size,
        file.content_type,
    )

    key = build_storage_key(user_id, filename)

    return ProfileImageUploadResponse(
        success=True,
        user_id=user_id,
        key=key,
        image_uri=uploads.storage.public_url(key, uploads.bucket),
    )
