"""Unit tests for log sanitizing helpers"""

import pytest

from backend.utils.sanitize import mask_secret, sanitize_headers, sanitize_string


@pytest.mark.unit
class TestSanitize:

    def test_sanitize_headers(self):
        headers = {"Authorization": "Bearer sk_studio_abc", "Content-Type": "application/json", "x-api-key": "k"}

        result = sanitize_headers(headers)

        assert result["Authorization"] == "***REDACTED***"
        assert result["x-api-key"] == "***REDACTED***"
        assert result["Content-Type"] == "application/json"

    @pytest.mark.parametrize("secret", [
        "sk-proj-abcdefghijklmnopqrstuvwxyz",
        "sk-ant-REDACTED",
        "sk-or-v1-abcdefghijklmnopqr",
        "xai-abcdefghijklmnopqrst",
        "AIzaSyAbcdefghijklmnopqrstuv",
        "sk_studio_abcdefghijklmnopqrstuvwxyz",
    ])
    def test_sanitize_string_removes_keys(self, secret):
        result = sanitize_string(f"Provider rejected key {secret} with 401")

        assert secret not in result
        assert "REDACTED" in result

    def test_sanitize_string_keeps_plain_text(self):
        assert sanitize_string("model not found") == "model not found"

    def test_mask_secret(self):
        assert mask_secret("sk-proj-abcdefghijkl") == "sk-proj-...***"
        assert mask_secret("short") == "***REDACTED***"
        assert mask_secret("") == "***INVALID***"
