# tests/conftest.py
import os
from typing import Generator
import pytest
from unittest.mock import Mock

from fastapi.testclient import TestClient

from gateway.api import create_app
from gateway.config import Settings, load_settings
from gateway.models import ProviderResult
from gateway.tools.notifications import TwilioProvider

# Test environment setup - fake credentials, nothing here reaches Twilio
TEST_ENVIRONMENT = {
    "TWILIO_ACCOUNT_SID": "ACxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    "TWILIO_AUTH_TOKEN": "test_twilio_auth_token_here",
    "TWILIO_SMS_NUMBER": "+14155238886",
    "TWILIO_WHATSAPP_SENDER": "+14155238887",
    "FRONTEND_URL": "https://gateway-frontend.example.com",
    "CLOUDINARY_CLOUD_NAME": "test-cloud",
    "CLOUDINARY_API_KEY": "123456789012345",
    "CLOUDINARY_API_SECRET": "test_cloudinary_secret",
}
os.environ.update(TEST_ENVIRONMENT)


@pytest.fixture
def settings() -> Settings:
    return load_settings(TEST_ENVIRONMENT)


@pytest.fixture
def mock_provider() -> Mock:
    """A Twilio adapter that records calls instead of making them."""
    provider = Mock(spec=TwilioProvider)
    provider.send_message.return_value = ProviderResult(
        id="SM00000000000000000000000000000001", status="queued"
    )
    provider.place_call.return_value = ProviderResult(
        id="CA00000000000000000000000000000001", status="queued"
    )
    provider.health_check.return_value = True
    return provider


@pytest.fixture
def client(settings: Settings, mock_provider: Mock) -> Generator[TestClient, None, None]:
    """Create a test client around a fresh app with the mocked provider."""
    app = create_app(settings, provider=mock_provider)
    with TestClient(app) as test_client:
        yield test_client
