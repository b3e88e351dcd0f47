# gateway/tools/uploads.py
import time
import logging
from typing import Optional

from cloudinary.utils import api_sign_request

from gateway.config import Settings
from gateway.errors import InvalidUploadType, UploadsNotConfigured
from gateway.models import SignedUpload, UploadType

logger = logging.getLogger(__name__)


def folder_for(upload_type: UploadType, settings: Settings) -> str:
    if upload_type is UploadType.AUDIO:
        return settings.upload_audio_folder
    return settings.upload_image_folder


def sign_upload(
    upload_type: Optional[str], settings: Settings, now: Optional[float] = None
) -> SignedUpload:
    """
    Sign a direct browser-to-Cloudinary upload.

    The signature covers the timestamp and destination folder, so the client
    cannot redirect the upload elsewhere. Cloudinary rejects signatures older
    than an hour. Only the public API key leaves the server.
    """
    try:
        parsed_type = UploadType(upload_type)
    except ValueError:
        raise InvalidUploadType(
            "Query parameter 'type' is required and must be 'audio' or 'image'."
        ) from None

    if not settings.uploads_enabled:
        raise UploadsNotConfigured("Upload signing is not configured on this server.")

    timestamp = round(time.time() if now is None else now)
    folder = folder_for(parsed_type, settings)
    signature = api_sign_request(
        {"timestamp": timestamp, "folder": folder},
        settings.cloudinary_api_secret,
    )
    logger.debug(f"Signed {parsed_type.value} upload into folder {folder}")

    return SignedUpload(
        timestamp=timestamp,
        signature=signature,
        apiKey=settings.cloudinary_api_key,
        cloudName=settings.cloudinary_cloud_name,
        folder=folder,
    )
