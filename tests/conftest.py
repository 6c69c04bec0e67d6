from __future__ import annotations

import typing as t
from pathlib import Path

import orjson
import pytest

from voicemail.config import Settings
from voicemail.logging import VoicemailLogger, create


def _make_config(tmp_path: Path, **logging_overrides: t.Any) -> Settings:
    """Voicemail-style config with both log files under ``tmp_path/logs``."""
    logging: dict[str, t.Any] = {
        "src": False,
        "normal": {"level": "info", "path": str(tmp_path / "logs" / "info.log")},
        "error": {"level": "error", "path": str(tmp_path / "logs" / "error.log")},
    }
    for key, value in logging_overrides.items():
        if isinstance(value, dict):
            logging[key] = {**logging[key], **value}
        else:
            logging[key] = value
    return Settings.from_mapping({"ari": {"applicationName": "voicemail"}, "logging": logging})


def _read_records(path: Path) -> list[dict[str, t.Any]]:
    return [orjson.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


@pytest.fixture
def config(tmp_path: Path) -> Settings:
    return _make_config(tmp_path)


@pytest.fixture
def quiet_config(tmp_path: Path) -> Settings:
    """Config with console streams disabled; records only go to the files."""
    return _make_config(tmp_path, normal={"stdout": False}, error={"stderr": False})


@pytest.fixture
def make_logger() -> t.Iterator[t.Callable[[Settings, str], VoicemailLogger]]:
    """Factory around `create` that closes every file stream it opened."""
    created: list[VoicemailLogger] = []

    def _make(settings: Settings, component: str) -> VoicemailLogger:
        log = create(settings, component)
        created.append(log)
        return log

    yield _make

    for log in created:
        log.close()


@pytest.fixture
def config_factory(tmp_path: Path) -> t.Callable[..., Settings]:
    return lambda **overrides: _make_config(tmp_path, **overrides)


@pytest.fixture
def read_records() -> t.Callable[[Path], list[dict[str, t.Any]]]:
    return _read_records
