"""
Configuration management using pydantic-settings.

Hierarchical configuration with environment variable support.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PredictorServiceSettings(BaseSettings):
    """Prediction service connection settings."""

    model_config = SettingsConfigDict(env_prefix="PREDICTOR_")

    url: str = Field(
        default="http://127.0.0.1:5000/predict",
        description="Prediction endpoint URL",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Deadline for one prediction request",
    )
    connect_timeout_seconds: float = Field(default=5.0, gt=0)


class FormSettings(BaseSettings):
    """Selection form behavior."""

    model_config = SettingsConfigDict(env_prefix="FORM_")

    reset_dependent_fields: bool = Field(
        default=False,
        description="Opt in to clearing toss winner / venue when their governing field changes",
    )
    default_venue_category: Literal["Countries", "Cities"] = Field(default="Countries")


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Literal["development", "staging", "production"] = Field(default="development")
    debug: bool = Field(default=True)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="console")

    # Nested settings
    predictor: PredictorServiceSettings = Field(default_factory=PredictorServiceSettings)
    form: FormSettings = Field(default_factory=FormSettings)

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
