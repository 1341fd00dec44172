"""
Logging setup for storex_graphql_client.

Handlers are attached to the package logger only; the root logger and other
libraries' loggers are left alone.
"""

import logging
import sys
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .formatters import ConsoleFormatter, StructuredFormatter

PACKAGE_LOGGER = "storex_graphql_client"


class LoggingManager:
    """Logging manager for the package logger."""

    def __init__(self, logger_name: str = PACKAGE_LOGGER) -> None:
        """Initialize logging manager."""
        self.logger_name = logger_name
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        self.logger.setLevel(_level(config.level))
        self._setup_console_handler(config)

        for component, level in config.component_levels.items():
            logging.getLogger(component).setLevel(_level(level))

        self._configured = True
        self.logger.debug("Logging configured at level %s", _level_name(config.level))

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        """Setup console logging handler."""
        handler = logging.StreamHandler(sys.stderr)

        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            use_colors = config.use_colors
            if use_colors is None:
                use_colors = handler.stream.isatty()
            formatter = ConsoleFormatter(config.format, use_colors=use_colors)

        handler.setFormatter(formatter)
        self.logger.addHandler(handler)
        self._handlers["console"] = handler

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for the package logger)
        """
        logging.getLogger(component or self.logger_name).setLevel(_level(level))

    def cleanup(self) -> None:
        """Remove and close the handlers this manager installed and reset the level."""
        for handler in self._handlers.values():
            self.logger.removeHandler(handler)
            handler.close()

        self._handlers.clear()
        self.logger.setLevel(logging.NOTSET)
        self._configured = False

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


def _level_name(level: LogLevel) -> str:
    # Pydantic may hand back the enum or its plain value
    return level.value if isinstance(level, LogLevel) else str(level)


def _level(level: LogLevel) -> int:
    return getattr(logging, _level_name(level))


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Setup package logging.

    Args:
        config: Logging configuration, defaults to ``LoggingConfig()``

    Returns:
        The manager owning the installed handlers
    """
    manager = LoggingManager()
    manager.setup_logging(config or LoggingConfig())
    return manager
