from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Harness settings loaded from ``FHIR_NOTES_*`` environment variables.
    """

    # Project layout
    config_dir_name: str = Field(
        default=".fhir-configs",
        description="Directory (under the project root) holding one JSON file per FHIR server config",
    )
    localized_dir_name: str = Field(
        default="localized",
        description="Directory (under the project root) receiving localized documents",
    )

    # Document defaults
    app_name: str = Field(default="FHIR Test App", description="Value for {{APP_NAME}}")
    identifier_system: str = Field(
        default="https://example.com/fhir-test",
        description="Default DocumentReference.identifier system",
    )

    # Setup server
    setup_host: str = Field(default="127.0.0.1", description="Setup server bind address")
    setup_port: int = Field(default=3456, description="Setup server port", ge=1, le=65535)

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_file: str | None = Field(default=None, description="Optional rotating log file path")

    model_config = SettingsConfigDict(
        env_prefix="FHIR_NOTES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
