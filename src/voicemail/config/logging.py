"""
Logging Configuration.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from voicemail.logging.types import LogLevel


class NormalStreamSettings(BaseModel):
    """Non-error output: a log file plus, unless disabled, stdout."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level for the normal streams")
    path: str = Field(default="logs/voicemail.log", min_length=1, description="Log file path")
    stdout: bool = Field(default=True, description="Also write to standard output")


class ErrorStreamSettings(BaseModel):
    """Error output: a log file plus, unless disabled, stderr."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(default=LogLevel.ERROR, description="Minimum level for the error streams")
    path: str = Field(default="logs/voicemail-error.log", min_length=1, description="Error log file path")
    stderr: bool = Field(default=True, description="Also write to standard error")


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration.

    Nested values use ``__`` in environment variables, e.g.
    ``VM_LOG_NORMAL__PATH=/var/log/voicemail/info.log``.
    """

    model_config = SettingsConfigDict(
        env_prefix="VM_LOG_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    src: bool = Field(default=False, description="Include call-site (file, function, line) in records")
    console_format: Literal["json", "console"] = Field(default="json", description="Console stream format")
    normal: NormalStreamSettings = Field(default_factory=NormalStreamSettings)
    error: ErrorStreamSettings = Field(default_factory=ErrorStreamSettings)
