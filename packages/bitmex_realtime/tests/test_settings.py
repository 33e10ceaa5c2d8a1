"""Tests for RealtimeSettings."""

import pytest
from pydantic import ValidationError

from bitmex_realtime.settings import MAINNET_ENDPOINT, TESTNET_ENDPOINT, RealtimeSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep developer environment and .env files out of these tests."""
    for name in (
        "BITMEX_ENDPOINT",
        "BITMEX_TESTNET",
        "BITMEX_READ_DEADLINE",
        "BITMEX_PING_INTERVAL",
        "BITMEX_API_KEY",
        "BITMEX_API_SECRET",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestRealtimeSettings:
    def test_defaults(self):
        settings = RealtimeSettings()

        assert settings.url == MAINNET_ENDPOINT
        assert settings.read_deadline == 300.0
        assert settings.ping_interval == 5.0
        assert settings.ping_write_timeout == 5.0
        assert settings.auth_ttl_seconds == 86400
        assert not settings.has_credentials()

    def test_testnet_flag_selects_testnet_endpoint(self):
        assert RealtimeSettings(testnet=True).url == TESTNET_ENDPOINT

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BITMEX_TESTNET", "true")
        monkeypatch.setenv("BITMEX_PING_INTERVAL", "2.5")
        monkeypatch.setenv("BITMEX_API_KEY", "key-id")
        monkeypatch.setenv("BITMEX_API_SECRET", "secret")

        settings = RealtimeSettings()

        assert settings.url == TESTNET_ENDPOINT
        assert settings.ping_interval == 2.5
        assert settings.has_credentials()
        assert settings.api_secret.get_secret_value() == "secret"

    def test_secret_hidden_in_repr(self):
        settings = RealtimeSettings(api_key="key-id", api_secret="do-not-print")

        assert "do-not-print" not in repr(settings)

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("BITMEX_READ_DEADLINE=30\n")

        assert RealtimeSettings().read_deadline == 30.0

    def test_key_without_secret_is_not_credentials(self):
        assert not RealtimeSettings(api_key="key-id").has_credentials()

    @pytest.mark.parametrize("field", ["read_deadline", "ping_interval", "connect_timeout"])
    def test_non_positive_durations_rejected(self, field):
        with pytest.raises(ValidationError):
            RealtimeSettings(**{field: 0})
