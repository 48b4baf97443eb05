"""Tests for settings loading."""

import sys

import pytest
from planka_relay.config import ServerConfig, Settings, SlackConfig, load_settings
from planka_relay.utils.platform import get_config_dir


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("PLANKA_RELAY_CONFIG", "PLANKA_RELAY_LOG_LEVEL", "PLANKA_RELAY_SLACK__TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PLANKA_RELAY_CONFIG_DIR", str(tmp_path / "missing"))


class TestDefaults:
    def test_server_defaults(self):
        cfg = ServerConfig()
        assert cfg.bind == "0.0.0.0"
        assert cfg.port == 3001
        assert cfg.auth_token == ""

    def test_slack_defaults(self):
        cfg = SlackConfig()
        assert cfg.default_channel == "#general"
        assert cfg.log_channel == ""
        assert cfg.api_url == "https://slack.com/api"

    def test_settings_nested(self):
        settings = Settings()
        assert isinstance(settings.server, ServerConfig)
        assert isinstance(settings.slack, SlackConfig)
        assert settings.log_level == "INFO"


class TestLoadSettings:
    def test_no_file(self):
        settings = load_settings()
        assert settings.server.port == 3001

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "server:\n  port: 4000\n  auth_token: abc\n"
            "slack:\n  default_channel: '#kanban'\n"
        )
        settings = load_settings(path)
        assert settings.server.port == 4000
        assert settings.server.auth_token == "abc"
        assert settings.slack.default_channel == "#kanban"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "relay.yaml"
        path.write_text("log_level: DEBUG\n")
        monkeypatch.setenv("PLANKA_RELAY_CONFIG", str(path))
        assert load_settings().log_level == "DEBUG"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("slack:\n  token: from-yaml\n  default_channel: '#kanban'\n")
        monkeypatch.setenv("PLANKA_RELAY_SLACK__TOKEN", "from-env")
        settings = load_settings(path)
        assert settings.slack.token == "from-env"
        assert settings.slack.default_channel == "#kanban"

    def test_default_config_dir(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "cfg"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("server:\n  port: 5000\n")
        monkeypatch.setenv("PLANKA_RELAY_CONFIG_DIR", str(config_dir))
        assert load_settings().server.port == 5000


class TestConfigDir:
    def test_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PLANKA_RELAY_CONFIG_DIR", str(tmp_path))
        assert get_config_dir() == tmp_path

    def test_xdg_on_linux(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLANKA_RELAY_CONFIG_DIR", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.setattr(sys, "platform", "linux")
        assert get_config_dir() == tmp_path / "planka-relay"

    def test_home_fallback_on_linux(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLANKA_RELAY_CONFIG_DIR", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setattr(sys, "platform", "linux")
        assert get_config_dir() == tmp_path / ".config" / "planka-relay"

    def test_appdata_on_windows(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLANKA_RELAY_CONFIG_DIR", raising=False)
        monkeypatch.setenv("APPDATA", str(tmp_path))
        monkeypatch.setattr(sys, "platform", "win32")
        assert get_config_dir() == tmp_path / "planka-relay"
