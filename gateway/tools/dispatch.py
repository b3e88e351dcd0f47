# gateway/tools/dispatch.py
import logging
from typing import assert_never

from twilio.twiml.voice_response import VoiceResponse

from gateway.config import Settings
from gateway.models import (
    CallPayload,
    CallType,
    Channel,
    MessagePayload,
    ProviderPayload,
    ProviderResult,
    SendRequest,
)
from gateway.tools.notifications import TwilioProvider

logger = logging.getLogger(__name__)

WHATSAPP_PREFIX = "whatsapp:"


def whatsapp_address(number: str) -> str:
    """Prefix a number for the WhatsApp channel, leaving prefixed ones alone."""
    if number.startswith(WHATSAPP_PREFIX):
        return number
    return f"{WHATSAPP_PREFIX}{number}"


def build_call_twiml(request: SendRequest, voice: str) -> str:
    """Render the TwiML a voice call executes once answered."""
    response = VoiceResponse()
    if request.call_type is CallType.AUDIO:
        response.play(request.audio_url)
    else:
        response.say(request.message, voice=voice)
    response.hangup()
    return str(response)


def build_payload(request: SendRequest, settings: Settings) -> ProviderPayload:
    """Turn a validated request into the payload for exactly one Twilio call."""
    channel = request.channel
    if channel is Channel.SMS:
        return MessagePayload(
            from_=settings.twilio_sms_number,
            to=request.recipient,
            body=request.message,
            media_url=[request.image_url] if request.image_url else None,
        )
    elif channel is Channel.WHATSAPP:
        return MessagePayload(
            from_=whatsapp_address(settings.twilio_whatsapp_sender),
            to=whatsapp_address(request.recipient),
            body=request.message,
            media_url=[request.image_url] if request.image_url else None,
        )
    elif channel is Channel.CALL:
        return CallPayload(
            from_=settings.twilio_sms_number,
            to=request.recipient,
            twiml=build_call_twiml(request, settings.tts_voice),
        )
    else:
        assert_never(channel)


def dispatch(
    request: SendRequest, settings: Settings, provider: TwilioProvider
) -> ProviderResult:
    """Build the payload for ``request`` and hand it to the provider."""
    payload = build_payload(request, settings)
    if isinstance(payload, CallPayload):
        result = provider.place_call(payload)
    else:
        result = provider.send_message(payload)

    logger.info(
        f"Successfully initiated {request.channel.value} to {request.recipient}. "
        f"SID: {result.id}"
    )
    return result
