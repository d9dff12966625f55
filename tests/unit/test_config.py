"""Unit tests for application settings."""

import pytest

from vouch.config import AuthSettings, Settings
from vouch.util.error import ConfigurationError


class TestSettings:
    def test_api_urls_follow_environment(self):
        development = Settings(environment="development", host="localhost")
        production = Settings(
            environment="production", host="api.vouch.app", frontend_host="vouch.app"
        )

        assert development.api.base_url == "http://localhost:8000"
        assert production.api.base_url == "https://api.vouch.app"
        assert production.api.frontend_url == "https://vouch.app"

    def test_default_secret_rejected_when_deployed(self):
        with pytest.raises(ConfigurationError):
            Settings(environment="production").ensure_deployable()

        Settings(environment="development").ensure_deployable()
        Settings(
            environment="production", auth=AuthSettings(jwt_secret="s3cret")
        ).ensure_deployable()

    def test_cors_origins(self):
        development = Settings(environment="development")
        production = Settings(
            environment="production",
            frontend_host="vouch.app",
            cors_extra_origins=["https://admin.vouch.app"],
        )

        assert "http://localhost:3000" in development.api.cors_origins
        assert production.api.cors_origins == [
            "https://vouch.app",
            "https://admin.vouch.app",
        ]
