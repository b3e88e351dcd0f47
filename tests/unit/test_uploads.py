# tests/unit/test_uploads.py
import hashlib
from dataclasses import replace
import pytest

from gateway.errors import InvalidUploadType, UploadsNotConfigured
from gateway.tools.uploads import sign_upload


class TestSignUpload:
    def test_audio_upload(self, settings):
        upload = sign_upload("audio", settings, now=1700000000.4)

        expected = hashlib.sha1(
            b"folder=twilio_audio&timestamp=1700000000test_cloudinary_secret"
        ).hexdigest()
        assert upload.timestamp == 1700000000
        assert upload.folder == "twilio_audio"
        assert upload.signature == expected
        assert upload.apiKey == "123456789012345"
        assert upload.cloudName == "test-cloud"

    def test_image_upload_uses_image_folder(self, settings):
        upload = sign_upload("image", settings, now=1700000000)
        assert upload.folder == "twilio_images"
        assert upload.signature != sign_upload("audio", settings, now=1700000000).signature

    def test_secret_is_never_returned(self, settings):
        upload = sign_upload("audio", settings, now=1700000000)
        assert "test_cloudinary_secret" not in upload.model_dump_json()

    @pytest.mark.parametrize("upload_type", [None, "", "video", "AUDIO"])
    def test_invalid_type(self, settings, upload_type):
        with pytest.raises(InvalidUploadType):
            sign_upload(upload_type, settings)

    def test_type_checked_before_configuration(self, settings):
        settings = replace(settings, cloudinary_api_secret=None)
        with pytest.raises(InvalidUploadType):
            sign_upload("video", settings)

    def test_not_configured(self, settings):
        settings = replace(
            settings,
            cloudinary_cloud_name=None,
            cloudinary_api_key=None,
            cloudinary_api_secret=None,
        )
        with pytest.raises(UploadsNotConfigured):
            sign_upload("audio", settings)
