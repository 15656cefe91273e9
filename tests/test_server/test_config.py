"""Tests for client settings."""

import os

from printerapp.config import DEFAULT_SOCKET_DIR, ClientSettings, get_settings


class TestClientSettings:
    """Tests for ClientSettings."""

    def test_defaults(self, monkeypatch):
        """Defaults match the usual server setup."""
        for name in [n for n in os.environ if n.startswith("PRINTERAPP_")]:
            monkeypatch.delenv(name, raising=False)
        settings = ClientSettings()

        assert settings.connect_timeout == 30.0
        assert settings.poll_interval == 0.25
        assert settings.startup_timeout == 60.0
        assert settings.ipp_port == 631
        assert DEFAULT_SOCKET_DIR == "/var/run"

    def test_prefixed_environment(self, monkeypatch):
        """PRINTERAPP_* variables override defaults."""
        monkeypatch.setenv("PRINTERAPP_SOCKET_DIR", "/run/apps")
        monkeypatch.setenv("PRINTERAPP_POLL_INTERVAL", "0.5")

        settings = ClientSettings()

        assert settings.socket_dir == "/run/apps"
        assert settings.poll_interval == 0.5

    def test_standard_variables(self, monkeypatch):
        """TMPDIR and SNAP_COMMON are read without the prefix."""
        monkeypatch.setenv("TMPDIR", "/home/me/tmp")
        monkeypatch.delenv("SNAP_COMMON", raising=False)

        settings = ClientSettings()

        assert settings.tmpdir == "/home/me/tmp"
        assert settings.snap_common is None

    def test_get_settings_is_cached(self):
        """get_settings returns the same instance."""
        assert get_settings() is get_settings()
