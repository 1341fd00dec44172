"""
Logging support for storex_graphql_client.

Structured and plain console output for the package logger. Call events
reach it through ``LoggingObserver``.
"""

from .formatters import ConsoleFormatter, StructuredFormatter
from .manager import PACKAGE_LOGGER, LoggingManager, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "PACKAGE_LOGGER",
    "StructuredFormatter",
    "ConsoleFormatter",
]
