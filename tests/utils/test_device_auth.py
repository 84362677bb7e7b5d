"""Tests for device key verification."""

import pytest

from petfeeder.utils.device_auth import (
    DeviceKeyVerifier,
    device_key_required,
    is_device_endpoint,
)


class TestDeviceKeyVerifier:
    """Tests for DeviceKeyVerifier."""

    def test_accepts_exact_key(self):
        verifier = DeviceKeyVerifier("s3cret-key")
        assert verifier.verify("s3cret-key") is True

    @pytest.mark.parametrize(
        "presented", ["s3cret-ke", "s3cret-key ", "S3CRET-KEY", "other", ""]
    )
    def test_rejects_anything_else(self, presented):
        verifier = DeviceKeyVerifier("s3cret-key")
        assert verifier.verify(presented) is False

    def test_rejects_missing_header(self):
        verifier = DeviceKeyVerifier("s3cret-key")
        assert verifier.verify(None) is False

    def test_handles_non_ascii_keys(self):
        verifier = DeviceKeyVerifier("clé-ü")
        assert verifier.verify("clé-ü") is True
        assert verifier.verify("cle-u") is False

    def test_empty_configured_key_is_rejected(self):
        with pytest.raises(ValueError):
            DeviceKeyVerifier("")


class TestDeviceKeyRequired:
    """Tests for the @device_key_required marker."""

    def test_marks_function(self):
        @device_key_required
        def view():
            return "ok"

        assert is_device_endpoint(view) is True
        assert view() == "ok"

    def test_unmarked_function(self):
        def view():
            return "ok"

        assert is_device_endpoint(view) is False
        assert is_device_endpoint(None) is False
