"""Base Pydantic models for build step configuration.

This module defines the foundational model classes used by configuration
structures. Step configuration is immutable and strictly validated so that
a configured build step behaves the same way on every build.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for build step configuration.

    Design principles enforced by this model:
        - Immutability: a configured step cannot be modified after
          creation, so a build never observes a half-updated step.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in configuration.

    Fields may be populated either by name or by alias.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        populate_by_name=True,
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    This class serves as the root for all settings models responsible for
    resolving runtime configuration from environment variables.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so the surrounding environment may contain unrelated variables.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
