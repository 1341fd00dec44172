"""
Configuration models for storex_graphql_client.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Package logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )
    use_colors: Optional[bool] = Field(
        default=None, description="Colored console output (auto-detect if unset)"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )

    model_config = ConfigDict(extra="forbid")


class ClientConfig(BaseModel):
    """Configuration for StorexGraphQLClient."""

    endpoint: str = Field(description="GraphQL endpoint URL")
    auto_pk_field: Optional[str] = Field(
        default=None,
        description="Field appended to every collection as its auto primary key",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Reject blank endpoints."""
        if not v or not v.strip():
            raise ValueError("Endpoint must not be empty")
        return v.strip()

    @field_validator("auto_pk_field")
    @classmethod
    def validate_auto_pk_field(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty field name as no auto primary key."""
        return v or None
