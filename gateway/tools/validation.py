# gateway/tools/validation.py
import re
from typing import Any, Mapping

from gateway.errors import (
    ImageNotAllowed,
    InvalidBody,
    InvalidCallType,
    InvalidChannel,
    InvalidRecipientFormat,
    MissingContent,
    MissingField,
)
from gateway.models import CallType, Channel, SendRequest

# E.164: "+" then 2-15 digits, first digit non-zero
E164_PATTERN = re.compile(r"\+[1-9][0-9]{1,14}")


def is_e164(value: Any) -> bool:
    return isinstance(value, str) and E164_PATTERN.fullmatch(value) is not None


def _text(data: Mapping[str, Any], key: str):
    """Return a field as a non-empty string, or None when absent/blank."""
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidBody(f"Field '{key}' must be a string.")
    return value


def validate_send_request(data: Any) -> SendRequest:
    """
    Validate a raw /send body and return a normalized SendRequest.

    Checks run in a fixed order and the first failure is raised:
    required fields, channel content, recipient format, channel name,
    and finally the call type for voice calls.
    """
    if not isinstance(data, Mapping):
        raise InvalidBody("Request body must be a JSON object.")

    channel = _text(data, "channel")
    recipient = _text(data, "recipient")
    if not channel or not recipient:
        raise MissingField("Missing required fields: channel or recipient.")

    message = _text(data, "message")
    image_url = _text(data, "imageUrl")
    call_type = _text(data, "callType")
    audio_url = _text(data, "audioUrl")

    if channel == Channel.CALL.value:
        if image_url:
            raise ImageNotAllowed("Cannot send an image with a voice call.")
        if call_type in (None, CallType.TTS.value) and not message:
            raise MissingContent("A message is required for text-to-speech calls.")
        if call_type == CallType.AUDIO.value and not audio_url:
            raise MissingContent("An audio URL is required for audio file calls.")
    elif not message and not image_url:
        raise MissingContent("A message or an image URL is required.")

    if not is_e164(recipient):
        raise InvalidRecipientFormat(
            f"Invalid phone number format: {recipient}. "
            "Must be in E.164 format (e.g., +919876543210)."
        )

    try:
        parsed_channel = Channel(channel)
    except ValueError:
        raise InvalidChannel("Invalid channel specified.") from None

    if parsed_channel is not Channel.CALL:
        return SendRequest(
            channel=parsed_channel,
            recipient=recipient,
            message=message,
            image_url=image_url,
        )

    try:
        parsed_call_type = CallType(call_type or CallType.TTS.value)
    except ValueError:
        raise InvalidCallType(
            f"Invalid call type: {call_type}. Must be 'tts' or 'audio'."
        ) from None

    return SendRequest(
        channel=parsed_channel,
        recipient=recipient,
        message=message if parsed_call_type is CallType.TTS else None,
        call_type=parsed_call_type,
        audio_url=audio_url if parsed_call_type is CallType.AUDIO else None,
    )
