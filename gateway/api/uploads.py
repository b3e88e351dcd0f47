# gateway/api/uploads.py
from typing import Optional
from fastapi import APIRouter, Depends, Query

from gateway.config import Settings
from gateway.models import SignedUpload
from gateway.tools.uploads import sign_upload

from .shared import get_settings, rate_limit

router = APIRouter(prefix="/api", tags=["Uploads"])


@router.get(
    "/sign-upload",
    response_model=SignedUpload,
    summary="Sign a media upload",
    dependencies=[Depends(rate_limit)],
)
async def sign_upload_endpoint(
    upload_type: Optional[str] = Query(None, alias="type"),
    settings: Settings = Depends(get_settings),
):
    """
    Provide a signature so the frontend can upload audio or images straight
    to Cloudinary without ever seeing the API secret.
    """
    return sign_upload(upload_type, settings)
