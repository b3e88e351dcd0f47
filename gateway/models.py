# gateway/models.py
from enum import Enum
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---
class Channel(str, Enum):
    SMS = "sms"
    WHATSAPP = "whatsapp"
    CALL = "call"


class CallType(str, Enum):
    TTS = "tts"
    AUDIO = "audio"


class UploadType(str, Enum):
    AUDIO = "audio"
    IMAGE = "image"


# --- Inbound request ---
class SendRequest(BaseModel):
    """A validated /send request. Only built by ``validate_send_request``."""

    model_config = ConfigDict(frozen=True)

    channel: Channel
    recipient: str
    message: Optional[str] = None
    image_url: Optional[str] = None
    call_type: Optional[CallType] = None
    audio_url: Optional[str] = None


# --- Provider payloads ---
class MessagePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["message"] = "message"
    from_: str
    to: str
    body: Optional[str] = None
    media_url: Optional[List[str]] = None

    def to_params(self) -> dict:
        """Keyword arguments for ``client.messages.create``."""
        params = {"from_": self.from_, "to": self.to}
        if self.body:
            params["body"] = self.body
        if self.media_url:
            params["media_url"] = list(self.media_url)
        return params


class CallPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["call"] = "call"
    from_: str
    to: str
    twiml: str

    def to_params(self) -> dict:
        """Keyword arguments for ``client.calls.create``."""
        return {"from_": self.from_, "to": self.to, "twiml": self.twiml}


ProviderPayload = Union[MessagePayload, CallPayload]


class ProviderResult(BaseModel):
    id: str = Field(..., description="The SID Twilio assigned to the message or call.")
    status: Optional[str] = Field(None, description="Initial status reported by Twilio.")


class SignedUpload(BaseModel):
    """Credentials for a direct browser-to-Cloudinary upload."""

    timestamp: int
    signature: str
    apiKey: str
    cloudName: str
    folder: str
