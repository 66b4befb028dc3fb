"""Library settings powered by Pydantic BaseSettings."""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SerfigSettings(BaseSettings):
    """Logging knobs read from ``SERFIG_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="SERFIG_", case_sensitive=False)

    log_level: LogLevel = Field(default="INFO")
    log_json: bool = Field(default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for ``log_level``."""
        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> SerfigSettings:
    """Get a settings instance."""
    return SerfigSettings()
