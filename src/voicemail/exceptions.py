"""
Voicemail logging error hierarchy.

Filesystem errors raised while preparing log directories and attribute errors
raised by serializers are not wrapped; they reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class VoicemailError(Exception):
    """Base class for errors raised by this package."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(VoicemailError):
    """The supplied configuration does not describe valid settings."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_CONFIGURATION", details=details)
