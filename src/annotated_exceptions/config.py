from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT = "development"


class Settings(BaseSettings):
    environment: str | None = Field(
        default=None, validation_alias=AliasChoices("APP_ENV", "ENVIRONMENT")
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _parse_environment(cls, v: str | None) -> str | None:
        if v == "":
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_development(self) -> bool:
        return self.environment == DEVELOPMENT


def is_development_mode(environment: str | None = None) -> bool:
    """Return whether *environment* (or the configured one) keeps stacks.

    Settings are read on every call so the current environment applies.
    """
    if environment is not None:
        return environment == DEVELOPMENT
    return Settings().is_development
