"""Configuration management for param-schema.

This module provides a pydantic-based configuration system that loads settings
from environment variables (prefixed with ``PARAM_SCHEMA_``) or a ``.env`` file.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_NESTING_DEPTH = 64
# Recursive parsing at this depth stays within the default interpreter recursion limit.
MAX_NESTING_DEPTH_LIMIT = 200

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Config(BaseSettings):
    """Configuration settings for param-schema.

    Environment Variables:
        PARAM_SCHEMA_MAX_NESTING_DEPTH: Deepest nested block the builder accepts
        PARAM_SCHEMA_LOG_LEVEL: Logging level used by the CLI (e.g. 'DEBUG', 'INFO')

    Example:
        >>> config = Config()
        >>> builder = SchemaTreeBuilder(max_depth=config.max_nesting_depth)
    """

    model_config = SettingsConfigDict(
        env_prefix="PARAM_SCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_nesting_depth: int = Field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        ge=1,
        le=MAX_NESTING_DEPTH_LIMIT,
        description="Maximum nesting depth of declaration blocks",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Logging level for command-line usage",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def __repr__(self) -> str:
        return (
            f"Config("
            f"max_nesting_depth={self.max_nesting_depth!r}, "
            f"log_level={self.log_level!r}"
            f")"
        )


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        A Config instance with settings loaded from environment.
    """
    return Config()
