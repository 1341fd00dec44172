"""
Configuration for storex_graphql_client.
"""

from .loader import ConfigLoader, load_config
from .models import ClientConfig, LoggingConfig, LogLevel

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
]
