"""Tests for settings loading."""

import pytest

from planka_mcp.config import Settings
from planka_mcp.exceptions import ConfigurationError


class TestSettings:
    """Tests for Settings."""

    def test_env_values(self, monkeypatch) -> None:
        """Values are read from the environment."""
        monkeypatch.setenv("PLANKA_URL", "https://planka.example.com/")
        monkeypatch.setenv("PLANKA_TOKEN", "tok")
        monkeypatch.setenv("MCP_HTTP_PORT", "9000")
        monkeypatch.setenv("MCP_CORS_ALLOWED_ORIGINS", "https://a.test, https://b.test")

        settings = Settings(_env_file=None)

        assert settings.planka_url == "https://planka.example.com"
        assert settings.mcp_http_port == 9000
        assert settings.cors_origins_list == ["https://a.test", "https://b.test"]
        settings.require_planka()

    def test_url_required(self, monkeypatch) -> None:
        """A missing PLANKA_URL is a configuration error."""
        monkeypatch.delenv("PLANKA_URL", raising=False)
        with pytest.raises(ConfigurationError, match="PLANKA_URL"):
            Settings(_env_file=None).require_planka()

    def test_credentials_required(self, monkeypatch) -> None:
        """Without a token, both username and password are needed."""
        monkeypatch.setenv("PLANKA_URL", "https://planka.example.com")
        monkeypatch.delenv("PLANKA_TOKEN", raising=False)
        monkeypatch.delenv("PLANKA_PASSWORD", raising=False)
        monkeypatch.setenv("PLANKA_USERNAME", "demo")

        with pytest.raises(ConfigurationError, match="PLANKA_PASSWORD"):
            Settings(_env_file=None).require_planka()
