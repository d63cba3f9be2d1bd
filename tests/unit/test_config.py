"""Unit tests for settings."""

import pytest

from forum.config import CORSSettings, ObservabilitySettings, Settings


class TestCORS:
    def test_local_frontend(self):
        assert CORSSettings().allowed_origins == [
            "http://localhost:3000",
            "http://localhost:5173",
        ]

    def test_production_only_allows_deployed_client(self):
        cors = CORSSettings(frontend_host="forum.example.org", environment="production")

        assert cors.allowed_origins == ["https://forum.example.org"]

    def test_staging_also_allows_local_dev_servers(self):
        cors = CORSSettings(frontend_host="staging.example.org", environment="staging")

        assert cors.allowed_origins[0] == "https://staging.example.org"
        assert "http://localhost:3000" in cors.allowed_origins


class TestObservability:
    @pytest.mark.parametrize(
        "token,flag,expected",
        [
            (None, None, False),
            ("secret", None, True),
            ("secret", False, False),
            (None, True, True),
        ],
    )
    def test_should_send(self, token, flag, expected):
        settings = ObservabilitySettings(logfire_token=token, send_to_logfire=flag)

        assert settings.should_send is expected


class TestSettings:
    def test_nested_environment_variables(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("FRONTEND_HOST", "staging.example.org")
        monkeypatch.setenv("FORUM__MAX_WRITE_RETRIES", "7")
        monkeypatch.setenv("AUTH__JWT_SECRET", "from-env")

        settings = Settings()

        assert settings.forum.max_write_retries == 7
        assert settings.auth.jwt_secret == "from-env"
        assert settings.cors.environment == "staging"
        assert settings.cors.allowed_origins[0] == "https://staging.example.org"

    def test_explicit_git_sha_wins(self, monkeypatch):
        monkeypatch.setenv("GIT_SHA", "abc123")

        assert Settings().git_sha == "abc123"
