"""
Tests for configuration management
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mockflags.config import Settings, ServerConfig, LoggingConfig


class TestSettings:
    """Test Settings configuration"""

    def test_default_settings(self):
        """Test default settings values"""
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8765

    def test_environment_validation(self):
        """Test environment validation"""
        with patch.dict(os.environ, {"ENVIRONMENT": "invalid"}):
            with pytest.raises(ValidationError):
                Settings()

    def test_production_check(self):
        """Test production environment check"""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            settings = Settings()
            assert settings.is_production() is True
            assert settings.is_development() is False

    def test_test_environment(self):
        settings = Settings()

        assert settings.environment == "test"
        assert settings.is_development() is False


class TestServerConfig:
    """Test Server configuration"""

    def test_default_port(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ServerConfig()

        assert config.port == 8765
        assert config.host == "0.0.0.0"

    def test_port_from_environment(self):
        with patch.dict(os.environ, {"PORT": "9000", "HOST": "127.0.0.1"}):
            config = ServerConfig()

            assert config.port == 9000
            assert config.host == "127.0.0.1"

    def test_nested_in_settings(self):
        with patch.dict(os.environ, {"PORT": "9100"}):
            settings = Settings()

            assert settings.server.port == 9100

    def test_invalid_port(self):
        with patch.dict(os.environ, {"PORT": "not-a-port"}):
            with pytest.raises(ValidationError):
                ServerConfig()


class TestLoggingConfig:
    """Test Logging configuration"""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = LoggingConfig()

        assert config.level == "INFO"
        assert config.format == "json"
        assert config.file is None
        assert config.access_log is False

    def test_prefixed_environment(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG", "LOG_FORMAT": "TEXT", "LOG_FILE": "/tmp/mock.log"}):
            config = LoggingConfig()

            assert config.level == "DEBUG"
            assert config.format == "text"
            assert config.file == "/tmp/mock.log"

    def test_invalid_format(self):
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}):
            with pytest.raises(ValidationError):
                LoggingConfig()
