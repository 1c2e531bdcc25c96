"""Tests for AppSettings loading from the environment."""

from pathlib import Path

from pydantic import ValidationError
import pytest
from pytest import MonkeyPatch

from couchtube.config import AppSettings

ENV_VARS = [
    "SERVER_HOST",
    "PORT",
    "DATABASE_FILE_PATH",
    "JSON_FILE_PATH",
    "FULL_SCAN",
    "READONLY_MODE",
    "POPULATE_ONLY",
    "YOUTUBE_API_KEY",
    "YOUTUBE_API_TIMEOUT",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "LOG_INCLUDE_STACKTRACE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: MonkeyPatch) -> None:
    """Remove any settings variables inherited from the test environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _settings(**kwargs: object) -> AppSettings:
    return AppSettings(_cli_parse_args=False, _env_file=None, **kwargs)  # type: ignore


@pytest.mark.unit
def test_defaults():
    """Unset variables fall back to their defaults."""
    settings = _settings()

    assert settings.server_host == "0.0.0.0"
    assert settings.port == 8363
    assert settings.database_file_path == Path("couchtube.db")
    assert settings.json_file_path == Path("/videos.json")
    assert settings.full_scan is False
    assert settings.readonly_mode is False
    assert settings.populate_only is False
    assert settings.youtube_api_key == ""
    assert settings.youtube_api_timeout == 10.0
    assert settings.log_format == "human"
    assert settings.log_level == "INFO"


@pytest.mark.unit
def test_environment_overrides(monkeypatch: MonkeyPatch, tmp_path: Path):
    """Each setting is read from its environment variable."""
    monkeypatch.setenv("SERVER_HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DATABASE_FILE_PATH", str(tmp_path / "data.db"))
    monkeypatch.setenv("JSON_FILE_PATH", str(tmp_path / "videos.json"))
    monkeypatch.setenv("FULL_SCAN", "true")
    monkeypatch.setenv("READONLY_MODE", "1")
    monkeypatch.setenv("POPULATE_ONLY", "true")
    monkeypatch.setenv("YOUTUBE_API_KEY", "secret")
    monkeypatch.setenv("YOUTUBE_API_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_FORMAT", "json")

    settings = _settings()

    assert settings.server_host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.database_file_path == tmp_path / "data.db"
    assert settings.json_file_path == tmp_path / "videos.json"
    assert settings.full_scan is True
    assert settings.readonly_mode is True
    assert settings.populate_only is True
    assert settings.youtube_api_key == "secret"
    assert settings.youtube_api_timeout == 2.5
    assert settings.log_format == "json"


@pytest.mark.unit
def test_init_arguments_by_field_name():
    """Fields can also be set by name, e.g. from code or tests."""
    settings = _settings(port=1234, full_scan=True)

    assert settings.port == 1234
    assert settings.full_scan is True


@pytest.mark.unit
def test_paths_expand_user(monkeypatch: MonkeyPatch, tmp_path: Path):
    """A leading ~ in a path setting is expanded."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("DATABASE_FILE_PATH", "~/couchtube.db")

    settings = _settings()

    assert settings.database_file_path == tmp_path / "couchtube.db"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PORT", "0"),
        ("PORT", "70000"),
        ("PORT", "http"),
        ("FULL_SCAN", "maybe"),
        ("LOG_FORMAT", "xml"),
        ("YOUTUBE_API_TIMEOUT", "0"),
    ],
)
def test_invalid_values_raise(monkeypatch: MonkeyPatch, name: str, value: str):
    """Values that fail validation raise a ValidationError."""
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        _settings()
