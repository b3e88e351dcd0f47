# gateway/tools/notifications.py
import logging
from typing import Optional

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from gateway.config import Settings
from gateway.errors import ProviderError
from gateway.models import CallPayload, MessagePayload, ProviderResult

logger = logging.getLogger(__name__)


class TwilioProvider:
    """
    Thin adapter over the Twilio REST client.

    Exposes one method per outbound operation and converts every Twilio or
    transport failure into a ``ProviderError``. Nothing is retried here.
    """

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        client: Optional[Client] = None,
        timeout: Optional[float] = None,
    ):
        self.account_sid = account_sid
        self.client = client or Client(
            account_sid,
            auth_token,
            http_client=TwilioHttpClient(timeout=timeout),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TwilioProvider":
        return cls(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            timeout=settings.provider_timeout,
        )

    def send_message(self, payload: MessagePayload) -> ProviderResult:
        """Send an SMS or WhatsApp message."""
        try:
            message = self.client.messages.create(**payload.to_params())
        except (TwilioException, requests.RequestException) as e:
            raise self._provider_error(e, payload.to) from e
        return ProviderResult(id=message.sid, status=message.status)

    def place_call(self, payload: CallPayload) -> ProviderResult:
        """Place a voice call that runs the payload's TwiML."""
        try:
            call = self.client.calls.create(**payload.to_params())
        except (TwilioException, requests.RequestException) as e:
            raise self._provider_error(e, payload.to) from e
        return ProviderResult(id=call.sid, status=call.status)

    def health_check(self) -> bool:
        """Check that the Twilio credentials are accepted."""
        try:
            self.client.api.v2010.accounts(self.account_sid).fetch()
            return True
        except Exception as e:
            logger.error(f"Twilio health check failed: {e}")
            return False

    @staticmethod
    def _provider_error(error: Exception, recipient: str) -> ProviderError:
        logger.error(f"Twilio API Error for {recipient}: {error}", exc_info=True)
        if isinstance(error, TwilioRestException):
            return ProviderError(error.msg, status_code=error.status or 500, code=error.code)
        return ProviderError(str(error), status_code=500)
