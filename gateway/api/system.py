# gateway/api/system.py
import json
from datetime import datetime, UTC
from fastapi import APIRouter, Depends, Response, status
from starlette.concurrency import run_in_threadpool

from gateway.config import Settings
from gateway.tools.notifications import TwilioProvider

from .shared import get_provider, get_settings, rate_limit

router = APIRouter(tags=["System"])


# Root route, used as the liveness check by the hosting platform
@router.get("/", summary="Root route")
async def root():
    return {
        "status": "ok",
        "message": "Messaging gateway is running",
        "routes": [
            {
                "path": "/send",
                "method": "POST",
                "description": "Send an SMS, WhatsApp message or voice call",
            },
            {
                "path": "/api/sign-upload",
                "method": "GET",
                "description": "Sign a direct media upload (type=audio|image)",
            },
        ],
    }


@router.get("/health", summary="Health Check", dependencies=[Depends(rate_limit)])
async def health_check_endpoint(
    settings: Settings = Depends(get_settings),
    provider: TwilioProvider = Depends(get_provider),
):
    """Check Twilio reachability and upload configuration."""
    health_status = {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "services": {
            "twilio": await run_in_threadpool(provider.health_check),
            "uploads": settings.uploads_enabled,
        },
    }

    if not all(health_status["services"].values()):
        health_status["status"] = "degraded"
        return Response(
            content=json.dumps(health_status),
            status_code=status.HTTP_206_PARTIAL_CONTENT,
            media_type="application/json",
        )

    return health_status
