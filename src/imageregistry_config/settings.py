"""Centralized settings using pydantic-settings.

Configuration for the logging and tracing surroundings of the registry
configuration model, loaded from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imageregistry_config.constants import DEFAULT_CONFIG_NAME


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    All settings have sensible defaults. Override via environment variables
    as documented per field.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )
    correlation_ids: bool = Field(
        default=True,
        validation_alias="CORRELATION_IDS",
        description="Enable correlation IDs in logs for request tracing",
    )

    # Tracing
    tracing_enabled: bool = Field(
        default=False,
        validation_alias="TRACING_ENABLED",
        description="Create OpenTelemetry spans around validation entry points",
    )

    # Singleton identification
    config_name: str = Field(
        default=DEFAULT_CONFIG_NAME,
        validation_alias="REGISTRY_CONFIG_NAME",
        description="Name of the cluster-scoped registry configuration object",
    )


# Global settings instance - initialized once at module import
settings = Settings()
