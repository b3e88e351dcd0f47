# gateway/api/messages.py
import logging
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from gateway.config import Settings
from gateway.errors import InvalidBody
from gateway.tools.dispatch import dispatch
from gateway.tools.notifications import TwilioProvider
from gateway.tools.validation import validate_send_request

from .shared import get_provider, get_settings, rate_limit

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Messages"])


@router.post(
    "/send",
    summary="Send an SMS, WhatsApp message or voice call",
    dependencies=[Depends(rate_limit)],
)
async def send(
    request: Request,
    settings: Settings = Depends(get_settings),
    provider: TwilioProvider = Depends(get_provider),
):
    """
    Validate the body and forward it to Twilio.

    Body: ``{channel, recipient, message?, imageUrl?, callType?, audioUrl?}``.
    Validation failures answer 400; Twilio failures answer with Twilio's
    own status code.
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidBody("Request body must be valid JSON.") from None

    send_request = validate_send_request(body)
    result = await run_in_threadpool(dispatch, send_request, settings, provider)
    return {"success": True, "id": result.id}
