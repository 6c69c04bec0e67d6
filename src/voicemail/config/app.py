"""
Application Configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Basic application metadata."""

    model_config = SettingsConfigDict(
        env_prefix="VM_APP_",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Stasis application name; also the top-level logger name
    name: str = "voicemail"
