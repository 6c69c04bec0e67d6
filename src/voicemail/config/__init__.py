"""
Voicemail Configuration Module.

Implements the Nested Settings Pattern: each concern has its own model and
environment variable prefix, composed by `Settings`.

Multi-Environment Support:
    Set `VM_ENV` to one of: development, testing, staging, production
    The system will load .env files in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

There is no module-level instance. Build the settings once at startup and
pass them to whatever needs them:

    from voicemail.config import load_settings
    from voicemail.logging import create

    settings = load_settings()
    log = create(settings, "mailbox-reader")
"""

import os
from typing import Any, Mapping

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from voicemail.exceptions import ConfigurationError

from .app import AppSettings
from .logging import ErrorStreamSettings, LoggingSettings, NormalStreamSettings


def _get_env_files() -> tuple[str, ...]:
    """Determine which .env files to load based on VM_ENV."""
    env = os.getenv("VM_ENV", "development")
    return (
        ".env",
        ".env.local",
        f".env.{env}",
        f".env.{env}.local",
    )


class Settings(BaseSettings):
    """Composite settings aggregating the application and logging domains."""

    model_config = SettingsConfigDict(
        env_prefix="VM_",
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def application_name(self) -> str:
        return self.app.name

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """
        Build settings from a plain configuration mapping.

        Accepts the camelCase layout used by the voicemail JSON config::

            {
                "applicationName": "voicemail",   # or {"ari": {"applicationName": ...}}
                "logging": {
                    "src": false,
                    "normal": {"level": "info", "path": "./logs/info.log"},
                    "error": {"level": "error", "path": "./logs/error.log"}
                }
            }

        Raises:
            ConfigurationError: if the mapping does not describe valid settings.
        """
        name = data.get("applicationName")
        if name is None:
            name = (data.get("ari") or {}).get("applicationName", AppSettings.model_fields["name"].default)

        try:
            return cls(
                app=AppSettings.model_validate({"name": name}),
                logging=LoggingSettings.model_validate(data.get("logging", {})),
            )
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid voicemail configuration",
                details={"errors": exc.errors(include_url=False)},
            ) from exc


def load_settings() -> Settings:
    """Load settings from the environment and .env files."""
    return Settings()


__all__ = [
    "Settings",
    "load_settings",
    "AppSettings",
    "LoggingSettings",
    "NormalStreamSettings",
    "ErrorStreamSettings",
]
