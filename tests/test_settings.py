"""
Tests for settings and ambient credentials.
"""

from harvest_mcp.settings import Credentials, Settings, HARVEST_API_URL


class TestSettings:

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("HARVEST_ACCESS_TOKEN", "tok")
        monkeypatch.setenv("HARVEST_ACCOUNT_ID", "123")

        settings = Settings(_env_file=None)

        assert settings.ambient_credentials() == Credentials(token="tok", account_id="123")
        assert settings.ambient_credentials().complete

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("HARVEST_ACCESS_TOKEN", raising=False)
        monkeypatch.delenv("HARVEST_ACCOUNT_ID", raising=False)
        monkeypatch.delenv("HARVEST_MCP_ACCESS_TOKEN", raising=False)
        monkeypatch.delenv("HARVEST_MCP_ACCOUNT_ID", raising=False)

        settings = Settings(_env_file=None)

        assert settings.ambient_credentials() == Credentials()
        assert not settings.ambient_credentials().complete

    def test_empty_values_are_missing(self, monkeypatch):
        monkeypatch.setenv("HARVEST_ACCESS_TOKEN", "")
        monkeypatch.setenv("HARVEST_ACCOUNT_ID", "123")

        credentials = Settings(_env_file=None).ambient_credentials()

        assert credentials.token is None
        assert not credentials.complete

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HARVEST_MCP_TRANSPORT_MODE", raising=False)
        monkeypatch.delenv("HARVEST_MCP_BASE_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.base_url == HARVEST_API_URL
        assert settings.transport_mode == "stdio"

    def test_prefixed_overrides(self, monkeypatch):
        monkeypatch.setenv("HARVEST_MCP_TRANSPORT_MODE", "http")
        monkeypatch.setenv("HARVEST_MCP_HTTP_PORT", "9001")

        settings = Settings(_env_file=None)

        assert settings.transport_mode == "http"
        assert settings.http_port == 9001
