"""
Tools module - request validation, dispatch and provider adapters for the
messaging gateway.
"""

from .validation import validate_send_request, is_e164
from .dispatch import build_payload, dispatch
from .notifications import TwilioProvider
from .uploads import sign_upload

__all__ = [
    "validate_send_request",
    "is_e164",
    "build_payload",
    "dispatch",
    "TwilioProvider",
    "sign_upload",
]
