# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Tests for environment driven settings.
"""

import logging

import pytest

from rest_requests import RestSettings, load_rest_settings
from rest_requests.utils.env_parse_utils import get_env_bool, get_env_float, get_env_str

ENV_VARS = [
    "REST_REQUESTS_TIMEOUT",
    "REST_REQUESTS_VERIFY_SSL",
    "REST_REQUESTS_CA_BUNDLE",
    "REST_REQUESTS_FOLLOW_REDIRECTS",
    "REST_REQUESTS_NETWORK_TRACE",
    "REST_REQUESTS_USER_AGENT",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestRestSettings:
    """Test suite for RestSettings.from_env."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test values used when nothing is configured."""
        assert load_rest_settings() == RestSettings()

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that every variable is honored."""
        clean_env.setenv("REST_REQUESTS_TIMEOUT", "12.5")
        clean_env.setenv("REST_REQUESTS_VERIFY_SSL", "false")
        clean_env.setenv("REST_REQUESTS_CA_BUNDLE", "/etc/ssl/custom.pem")
        clean_env.setenv("REST_REQUESTS_FOLLOW_REDIRECTS", "0")
        clean_env.setenv("REST_REQUESTS_NETWORK_TRACE", "yes")
        clean_env.setenv("REST_REQUESTS_USER_AGENT", "inventory-sync/2.0")

        assert RestSettings.from_env() == RestSettings(
            timeout=12.5,
            verify_ssl=False,
            ca_bundle="/etc/ssl/custom.pem",
            follow_redirects=False,
            network_trace=True,
            user_agent="inventory-sync/2.0",
        )

    @pytest.mark.parametrize("value", ["-3", "0", "soon"])
    def test_invalid_timeout_falls_back(
        self, clean_env: pytest.MonkeyPatch, value: str
    ) -> None:
        """Test that unusable timeouts keep the default."""
        clean_env.setenv("REST_REQUESTS_TIMEOUT", value)
        assert RestSettings.from_env().timeout == 60.0


class TestEnvParseUtils:
    """Test suite for environment parsing helpers."""

    def test_invalid_bool_logs_warning(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that an invalid boolean keeps the default and warns."""
        monkeypatch.setenv("REST_REQUESTS_TEST_FLAG", "maybe")

        with caplog.at_level(logging.WARNING):
            assert get_env_bool("REST_REQUESTS_TEST_FLAG", True) is True

        assert "REST_REQUESTS_TEST_FLAG" in caplog.text

    def test_float(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REST_REQUESTS_TEST_FLOAT", "1.5")
        assert get_env_float("REST_REQUESTS_TEST_FLOAT", 2.0) == 1.5
        monkeypatch.delenv("REST_REQUESTS_TEST_FLOAT")
        assert get_env_float("REST_REQUESTS_TEST_FLOAT", 2.0) == 2.0

    def test_blank_string_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REST_REQUESTS_TEST_STR", "   ")
        assert get_env_str("REST_REQUESTS_TEST_STR") is None
        assert get_env_str("REST_REQUESTS_TEST_STR", "fallback") == "fallback"
