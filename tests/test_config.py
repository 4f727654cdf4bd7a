"""Tests for centralized configuration (alisms/config.py)."""

import os
from unittest.mock import patch

import pytest


class TestSettings:
    def test_default_settings_load(self):
        """Settings load with defaults when no env vars are set."""
        from alisms.config import Settings

        s = Settings()
        assert s.ALISMS_ACCESS_KEY_ID == ""
        assert s.ALISMS_ACCESS_KEY_SECRET.get_secret_value() == ""
        assert s.ALISMS_ENDPOINT == "https://dysmsapi.aliyuncs.com"
        assert s.ALISMS_TIMEOUT == 10.0
        assert s.has_credentials is False

    def test_env_var_overrides(self):
        from alisms.config import Settings

        with patch.dict(os.environ, {"ALISMS_ACCESS_KEY_ID": "id-1", "ALISMS_TIMEOUT": "3.5"}):
            s = Settings()
            assert s.ALISMS_ACCESS_KEY_ID == "id-1"
            assert s.ALISMS_TIMEOUT == 3.5

    def test_secret_is_masked(self):
        from alisms.config import Settings

        with patch.dict(os.environ, {"ALISMS_ACCESS_KEY_SECRET": "very-secret"}):
            s = Settings()
            assert s.ALISMS_ACCESS_KEY_SECRET.get_secret_value() == "very-secret"
            assert "very-secret" not in repr(s)

    def test_has_credentials_requires_both(self):
        from alisms.config import Settings

        with patch.dict(os.environ, {"ALISMS_ACCESS_KEY_ID": "id-1"}):
            assert Settings().has_credentials is False
        with patch.dict(
            os.environ, {"ALISMS_ACCESS_KEY_ID": "id-1", "ALISMS_ACCESS_KEY_SECRET": "s"}
        ):
            assert Settings().has_credentials is True

    def test_endpoint_trailing_slash_stripped(self):
        from alisms.config import Settings

        with patch.dict(os.environ, {"ALISMS_ENDPOINT": "https://dysmsapi.aliyuncs.com/"}):
            assert Settings().ALISMS_ENDPOINT == "https://dysmsapi.aliyuncs.com"

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_non_positive_timeout_rejected(self, value):
        from alisms.config import Settings

        with patch.dict(os.environ, {"ALISMS_TIMEOUT": value}):
            with pytest.raises(ValueError, match="ALISMS_TIMEOUT must be positive"):
                Settings()

    def test_get_settings_is_cached(self):
        from alisms.config import get_settings

        assert get_settings() is get_settings()
