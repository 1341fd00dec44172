"""
Configuration loader for storex_graphql_client.

Builds a ClientConfig from explicit overrides merged over environment
variables. There is no configuration file format.
"""

import os
from typing import Any, Dict, Mapping, Optional

from .models import ClientConfig

_BOOLEAN_KEYS = {"enable_structured"}


class ConfigLoader:
    """Configuration loader reading ``STOREX_GRAPHQL_*`` environment variables."""

    def __init__(self, env_prefix: str = "STOREX_GRAPHQL_") -> None:
        """Initialize configuration loader."""
        self.env_prefix = env_prefix

    def load_config(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ClientConfig:
        """
        Load configuration.

        Args:
            overrides: Values that win over the environment
            environ: Environment to read, ``os.environ`` by default

        Returns:
            Validated ClientConfig

        Raises:
            pydantic.ValidationError: If the merged values are invalid
        """
        config_data = self._load_from_environment(os.environ if environ is None else environ)
        if overrides:
            config_data = self._deep_merge(config_data, dict(overrides))
        return ClientConfig(**config_data)

    def _load_from_environment(self, environ: Mapping[str, str]) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings = {
            f"{self.env_prefix}ENDPOINT": ("endpoint",),
            f"{self.env_prefix}AUTO_PK_FIELD": ("auto_pk_field",),
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
        }

        for env_var, config_path in env_mappings.items():
            value = environ.get(env_var)
            if value is None:
                continue

            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            key = config_path[-1]
            current[key] = self._convert_env_value(value) if key in _BOOLEAN_KEYS else value

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ("true", "yes", "1", "on"):
            return True
        if value.lower() in ("false", "no", "0", "off"):
            return False
        return value

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def load_config(**overrides: Any) -> ClientConfig:
    """Load a ClientConfig from the environment with keyword overrides."""
    return ConfigLoader().load_config(overrides)
