"""
Tests for configuration models and the environment loader.
"""

import pytest
from pydantic import ValidationError

from storex_graphql_client import ClientConfig, ConfigLoader, LoggingConfig, LogLevel


class TestClientConfig:
    """Test the client configuration model."""

    def test_defaults(self):
        """Only the endpoint is required."""
        config = ClientConfig(endpoint="https://my.api/graphql")
        assert config.auto_pk_field is None
        assert config.logging.level == LogLevel.WARNING
        assert config.logging.enable_structured is False

    def test_endpoint_stripped(self):
        """Surrounding whitespace is removed."""
        assert ClientConfig(endpoint="  https://my.api/graphql ").endpoint == "https://my.api/graphql"

    def test_blank_endpoint(self):
        """Blank endpoints are rejected."""
        with pytest.raises(ValidationError):
            ClientConfig(endpoint="   ")

    def test_empty_auto_pk(self):
        """An empty auto primary key means none."""
        assert ClientConfig(endpoint="http://x", auto_pk_field="").auto_pk_field is None

    def test_unknown_field(self):
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            ClientConfig(endpoint="http://x", retries=3)


class TestConfigLoader:
    """Test loading configuration from the environment."""

    def test_load_from_environment(self):
        """Environment variables map onto the config."""
        environ = {
            "STOREX_GRAPHQL_ENDPOINT": "https://my.api/graphql",
            "STOREX_GRAPHQL_AUTO_PK_FIELD": "id",
            "STOREX_GRAPHQL_LOG_LEVEL": "DEBUG",
            "STOREX_GRAPHQL_LOG_STRUCTURED": "true",
        }

        config = ConfigLoader().load_config(environ=environ)

        assert config.endpoint == "https://my.api/graphql"
        assert config.auto_pk_field == "id"
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.enable_structured is True

    def test_overrides_win(self):
        """Explicit overrides are merged over the environment."""
        environ = {
            "STOREX_GRAPHQL_ENDPOINT": "https://env.api/graphql",
            "STOREX_GRAPHQL_LOG_LEVEL": "INFO",
        }

        config = ConfigLoader().load_config(
            overrides={"endpoint": "https://override.api/graphql", "logging": {"enable_structured": True}},
            environ=environ,
        )

        assert config.endpoint == "https://override.api/graphql"
        assert config.logging.level == LogLevel.INFO
        assert config.logging.enable_structured is True

    def test_custom_prefix(self):
        """The variable prefix is configurable."""
        config = ConfigLoader(env_prefix="MY_APP_").load_config(
            environ={"MY_APP_ENDPOINT": "http://localhost:4000/graphql"}
        )
        assert config.endpoint == "http://localhost:4000/graphql"

    def test_os_environ(self, monkeypatch):
        """``os.environ`` is read by default."""
        monkeypatch.setenv("STOREX_GRAPHQL_ENDPOINT", "http://localhost/graphql")
        assert ConfigLoader().load_config().endpoint == "http://localhost/graphql"

    def test_missing_endpoint(self):
        """Without an endpoint the config is invalid."""
        with pytest.raises(ValidationError):
            ConfigLoader().load_config(environ={})

    def test_logging_config_rejects_unknown_level(self):
        """Log levels are validated."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")
