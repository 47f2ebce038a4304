"""Layout configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LayoutSettings(BaseSettings):
    """Raw layout configuration strings.

    All settings can be overridden via environment variables prefixed with
    ``JSON_LAYOUT_`` (e.g. ``JSON_LAYOUT_EXCLUDED_FIELDS=thread;ndc``).
    """

    model_config = SettingsConfigDict(
        env_prefix="JSON_LAYOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Fields
    tags: str | None = Field(default=None, description="Delimited list of tags, e.g. 'api,prod'")
    static_fields: str | None = Field(
        default=None, description="Delimited static fields, e.g. 'app:billing;env=prod'"
    )
    included_fields: str | None = Field(
        default=None, description="Delimited field keys to add, e.g. 'location'"
    )
    excluded_fields: str | None = Field(
        default=None, description="Delimited field keys to drop, e.g. 'thread;ndc'"
    )
    renamed_field_labels: str | None = Field(
        default=None, description="Delimited 'key:label' pairs, e.g. 'message:msg'"
    )
    host_name: str | None = Field(
        default=None, description="Value of the host field; resolved from the system when unset"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="The root log level to use"
    )


@lru_cache
def get_settings() -> LayoutSettings:
    """Get cached settings instance."""
    return LayoutSettings()


__all__ = ["LayoutSettings", "get_settings"]
