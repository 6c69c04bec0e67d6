from __future__ import annotations

import pytest
from pydantic import ValidationError

from voicemail.config import Settings, load_settings
from voicemail.exceptions import ConfigurationError, VoicemailError
from voicemail.logging import LogLevel


class TestLogLevel:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("info", LogLevel.INFO),
            ("INFO", LogLevel.INFO),
            ("warning", LogLevel.WARN),
            ("critical", LogLevel.FATAL),
            ("trace", LogLevel.TRACE),
        ],
    )
    def test_parsing(self, raw: str, expected: LogLevel) -> None:
        assert LogLevel(raw) is expected

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            LogLevel("verbose")

    def test_ordering(self) -> None:
        numbers = [level.number for level in LogLevel]
        assert numbers == sorted(numbers)


class TestFromMapping:
    def test_original_layout(self) -> None:
        settings = Settings.from_mapping(
            {
                "ari": {"applicationName": "voicemail"},
                "logging": {
                    "src": True,
                    "normal": {"level": "info", "path": "./logs/info.log"},
                    "error": {"level": "error", "path": "./logs/error.log", "stderr": False},
                },
            }
        )

        assert settings.application_name == "voicemail"
        assert settings.logging.src is True
        assert settings.logging.normal.level is LogLevel.INFO
        assert settings.logging.normal.stdout is True
        assert settings.logging.error.stderr is False

    def test_flat_application_name(self) -> None:
        settings = Settings.from_mapping({"applicationName": "vm-test", "logging": {}})
        assert settings.application_name == "vm-test"

    @pytest.mark.parametrize("ari", [None, {}])
    def test_empty_ari_section_uses_default_name(self, ari: object) -> None:
        settings = Settings.from_mapping({"ari": ari, "logging": {}})
        assert settings.application_name == "voicemail"

    def test_defaults(self) -> None:
        settings = Settings.from_mapping({})
        assert settings.application_name == "voicemail"
        assert settings.logging.normal.path
        assert settings.logging.error.level is LogLevel.ERROR
        assert settings.logging.console_format == "json"

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as excinfo:
            Settings.from_mapping({"logging": {"normal": {"path": ""}}})

        assert isinstance(excinfo.value, VoicemailError)
        assert excinfo.value.code == "INVALID_CONFIGURATION"
        assert excinfo.value.details["errors"]

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Settings.from_mapping({"logging": {"error": {"level": "loud"}}})

    def test_settings_are_frozen(self) -> None:
        settings = Settings.from_mapping({})
        with pytest.raises(ValidationError):
            settings.logging.src = True  # type: ignore[misc]


class TestEnvironment:
    def test_load_settings_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VM_APP_NAME", "vm-env")
        monkeypatch.setenv("VM_LOG_SRC", "true")
        monkeypatch.setenv("VM_LOG_NORMAL__LEVEL", "debug")
        monkeypatch.setenv("VM_LOG_ERROR__STDERR", "false")

        settings = load_settings()

        assert settings.application_name == "vm-env"
        assert settings.logging.src is True
        assert settings.logging.normal.level is LogLevel.DEBUG
        assert settings.logging.error.stderr is False

    def test_each_call_builds_a_new_value(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_settings() is not load_settings()
