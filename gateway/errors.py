# gateway/errors.py
from typing import Optional


class GatewayError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code


# --- Client errors ---
class ValidationError(GatewayError):
    status_code = 400


class InvalidBody(ValidationError):
    pass


class MissingField(ValidationError):
    pass


class MissingContent(ValidationError):
    pass


class ImageNotAllowed(ValidationError):
    pass


class InvalidRecipientFormat(ValidationError):
    pass


class InvalidChannel(ValidationError):
    pass


class InvalidCallType(ValidationError):
    pass


class InvalidUploadType(ValidationError):
    pass


# --- Downstream / server errors ---
class ProviderError(GatewayError):
    """Raised when Twilio rejects a request or cannot be reached.

    ``status_code`` is the status Twilio answered with, so the caller sees
    the provider's own verdict (e.g. 400 for an unverified number).
    """


class UploadsNotConfigured(GatewayError):
    status_code = 503


class RateLimited(GatewayError):
    status_code = 429


class ConfigurationError(Exception):
    """Required configuration is missing or malformed. Fatal at startup."""
