"""Tests de configuración (pydantic-settings + .env de usuario)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir, write_user_env_vars


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.base_url == "https://develop.ivcap.net"
        assert settings.jwt is None
        assert settings.log_level == "WARNING"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("IVCAP_BASE_URL", "https://example.ivcap.net/")
        monkeypatch.setenv("IVCAP_JWT", "abc")
        monkeypatch.setenv("IVCAP_LOG_LEVEL", "debug")
        settings = AppSettings(_env_file=None)
        assert settings.base_url == "https://example.ivcap.net"
        assert settings.jwt == "abc"
        assert settings.log_level == "DEBUG"

    def test_project_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("IVCAP_JWT=from-file\n", encoding="utf-8")
        assert AppSettings().jwt == "from-file"

    def test_rejects_unknown_level(self, monkeypatch):
        monkeypatch.setenv("IVCAP_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)


class TestUserEnvFile:
    def test_config_dir_follows_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_user_config_dir() == tmp_path / "xdg" / "ivcap"

    def test_merges_existing_values(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"IVCAP_BASE_URL": "https://a", "IVCAP_JWT": "one"}, env_path=env_path)
        write_user_env_vars({"IVCAP_JWT": "two", "IVCAP_LOG_LEVEL": None}, env_path=env_path)

        text = env_path.read_text(encoding="utf-8")
        assert "IVCAP_BASE_URL=https://a" in text
        assert "IVCAP_JWT=two" in text
        assert "IVCAP_LOG_LEVEL" not in text
