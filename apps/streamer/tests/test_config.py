"""Tests for streamer configuration."""

import pytest
import yaml

from streamer.config import StreamerConfig, AccountConfig, load_config


class TestStreamerConfig:
    """Tests for StreamerConfig model."""

    def test_defaults(self):
        config = StreamerConfig()
        assert config.public_channels == []
        assert config.private_channels == []
        assert config.symbols == []
        assert config.testnet is False
        assert config.queue_size == 1000
        assert config.account is None

    def test_with_account(self):
        config = StreamerConfig(
            private_channels=["order"],
            account=AccountConfig(api_key="key1", api_secret="secret1"),
        )
        assert config.account.api_key.get_secret_value() == "key1"
        assert config.account.api_secret.get_secret_value() == "secret1"

    def test_account_secrets_redacted_in_repr(self):
        config = StreamerConfig(
            account=AccountConfig(api_key="key1", api_secret="secret1"),
        )
        text = repr(config)
        assert "key1" not in text
        assert "secret1" not in text

    def test_private_channels_without_account_allowed(self):
        # Credentials may come from BITMEX_API_KEY / BITMEX_API_SECRET instead
        config = StreamerConfig(private_channels=["order"])
        assert config.account is None

    def test_queue_size_must_be_positive(self):
        with pytest.raises(ValueError):
            StreamerConfig(queue_size=0)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_yaml(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text(yaml.dump({
            "public_channels": ["trade", "orderBook10"],
            "symbols": ["XBTUSD"],
            "testnet": True,
        }))

        config = load_config(str(config_file))
        assert config.public_channels == ["trade", "orderBook10"]
        assert config.symbols == ["XBTUSD"]
        assert config.testnet is True

    def test_load_with_account(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text(yaml.dump({
            "private_channels": ["order"],
            "account": {
                "api_key": "mykey",
                "api_secret": "mysecret",
            },
        }))

        config = load_config(str(config_file))
        assert config.account.api_key.get_secret_value() == "mykey"

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/streamer.yaml")

    def test_no_config_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STREAMER_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError, match="No config file found"):
            load_config()

    def test_env_var_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(yaml.dump({"symbols": ["ETHUSD"]}))
        monkeypatch.setenv("STREAMER_CONFIG_PATH", str(config_file))

        config = load_config()
        assert config.symbols == ["ETHUSD"]

    def test_default_search_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STREAMER_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)

        conf_dir = tmp_path / "conf"
        conf_dir.mkdir()
        (conf_dir / "streamer.yaml").write_text(yaml.dump({"symbols": ["XBTUSD"]}))
        (tmp_path / "streamer.yaml").write_text(yaml.dump({"symbols": ["ETHUSD"]}))

        config = load_config()
        assert config.symbols == ["XBTUSD"]

    def test_fallback_search_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STREAMER_CONFIG_PATH", raising=False)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "streamer.yaml").write_text(yaml.dump({"symbols": ["ETHUSD"]}))

        config = load_config()
        assert config.symbols == ["ETHUSD"]

    def test_invalid_config_values_raise_error(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text(yaml.dump({"queue_size": -5}))

        with pytest.raises(ValueError):
            load_config(str(config_file))

    def test_malformed_yaml_raises_value_error(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text("symbols: [unclosed bracket")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_non_mapping_root_raises_value_error(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text("- trade\n- quote\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(str(config_file))

    def test_empty_yaml_returns_defaults(self, tmp_path):
        config_file = tmp_path / "streamer.yaml"
        config_file.write_text("")

        config = load_config(str(config_file))
        assert config.public_channels == []
        assert config.testnet is False
