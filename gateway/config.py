# gateway/config.py
import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from limits import parse as parse_rate_limit

from gateway.errors import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_SMS_NUMBER",
    "TWILIO_WHATSAPP_SENDER",
    "FRONTEND_URL",
)
CLOUDINARY_VARIABLES = (
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
)


@dataclass(frozen=True)
class Settings:
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_sms_number: str
    twilio_whatsapp_sender: str
    frontend_url: str
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    rate_limit: str = "100/15 minutes"
    trust_proxy: bool = True
    tts_voice: str = "Polly.Aditi"
    provider_timeout: float = 15.0
    upload_audio_folder: str = "twilio_audio"
    upload_image_folder: str = "twilio_images"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def uploads_enabled(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: str, kind: type):
    try:
        number = kind(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")
    return number


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build the gateway settings from the environment.

    When ``environ`` is omitted, a local ``.env`` file is loaded first and
    ``os.environ`` is read. Missing Twilio credentials, a missing frontend
    origin or a partial set of Cloudinary credentials raise
    ``ConfigurationError``; the caller is expected to refuse to start.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    def get(name: str) -> Optional[str]:
        value = environ.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    missing = [name for name in REQUIRED_VARIABLES if not get(name)]
    if missing:
        raise ConfigurationError(
            f"Crucial configuration is not set: {', '.join(missing)}. "
            "Check your .env file or deployment environment."
        )

    cloudinary_set = [name for name in CLOUDINARY_VARIABLES if get(name)]
    if cloudinary_set and len(cloudinary_set) != len(CLOUDINARY_VARIABLES):
        unset = [name for name in CLOUDINARY_VARIABLES if name not in cloudinary_set]
        raise ConfigurationError(
            f"Cloudinary credentials are incomplete, missing: {', '.join(unset)}"
        )
    if not cloudinary_set:
        logger.warning("Cloudinary credentials not set, upload signing is disabled.")

    optional = {}
    if get("RATE_LIMIT"):
        try:
            parse_rate_limit(get("RATE_LIMIT"))
        except ValueError:
            raise ConfigurationError(
                f"RATE_LIMIT is not a rate limit: {get('RATE_LIMIT')!r}"
            ) from None
        optional["rate_limit"] = get("RATE_LIMIT")
    if get("TRUST_PROXY"):
        optional["trust_proxy"] = _parse_bool("TRUST_PROXY", get("TRUST_PROXY"))
    if get("TTS_VOICE"):
        optional["tts_voice"] = get("TTS_VOICE")
    if get("PROVIDER_TIMEOUT"):
        optional["provider_timeout"] = _parse_number(
            "PROVIDER_TIMEOUT", get("PROVIDER_TIMEOUT"), float
        )
    if get("UPLOAD_AUDIO_FOLDER"):
        optional["upload_audio_folder"] = get("UPLOAD_AUDIO_FOLDER")
    if get("UPLOAD_IMAGE_FOLDER"):
        optional["upload_image_folder"] = get("UPLOAD_IMAGE_FOLDER")
    if get("HOST"):
        optional["host"] = get("HOST")
    if get("PORT"):
        optional["port"] = _parse_number("PORT", get("PORT"), int)
    if get("LOG_LEVEL"):
        level = get("LOG_LEVEL").upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"LOG_LEVEL is not a logging level: {level!r}")
        optional["log_level"] = level

    return Settings(
        twilio_account_sid=get("TWILIO_ACCOUNT_SID"),
        twilio_auth_token=get("TWILIO_AUTH_TOKEN"),
        twilio_sms_number=get("TWILIO_SMS_NUMBER"),
        twilio_whatsapp_sender=get("TWILIO_WHATSAPP_SENDER"),
        frontend_url=get("FRONTEND_URL"),
        cloudinary_cloud_name=get("CLOUDINARY_CLOUD_NAME"),
        cloudinary_api_key=get("CLOUDINARY_API_KEY"),
        cloudinary_api_secret=get("CLOUDINARY_API_SECRET"),
        **optional,
    )
