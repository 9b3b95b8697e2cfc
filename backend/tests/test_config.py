"""Tests for environment-driven settings."""

import pytest

from fixmeet.config import DEFAULT_EXTERNAL_TIMEOUT_SECONDS, DEFAULT_MAX_WORKERS, DEFAULT_MODEL_NAME, load_settings

ENV_KEYS = (
    "GEMINI_API_KEY",
    "GENAI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "EXTERNAL_CALENDAR_TIMEOUT_SECONDS",
    "CHECK_EXTERNAL_CALENDAR",
    "AVAILABILITY_MAX_WORKERS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.gemini_api_key is None
    assert settings.gemini_model == DEFAULT_MODEL_NAME
    assert settings.external_calendar_timeout_seconds == DEFAULT_EXTERNAL_TIMEOUT_SECONDS
    assert settings.check_external_calendar is True
    assert settings.availability_max_workers == DEFAULT_MAX_WORKERS
    assert settings.log_level == "INFO"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    monkeypatch.setenv("EXTERNAL_CALENDAR_TIMEOUT_SECONDS", "1.5")
    monkeypatch.setenv("CHECK_EXTERNAL_CALENDAR", "off")
    monkeypatch.setenv("AVAILABILITY_MAX_WORKERS", "8")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.gemini_api_key == "google-key"
    assert settings.external_calendar_timeout_seconds == 1.5
    assert settings.check_external_calendar is False
    assert settings.availability_max_workers == 8
    assert settings.log_level == "DEBUG"


def test_first_api_key_wins(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert load_settings().gemini_api_key == "gemini-key"


@pytest.mark.parametrize(
    "key, value",
    [
        ("EXTERNAL_CALENDAR_TIMEOUT_SECONDS", "soon"),
        ("EXTERNAL_CALENDAR_TIMEOUT_SECONDS", "-2"),
        ("AVAILABILITY_MAX_WORKERS", "many"),
        ("AVAILABILITY_MAX_WORKERS", "0"),
        ("CHECK_EXTERNAL_CALENDAR", "maybe"),
    ],
)
def test_invalid_values_fall_back(monkeypatch, caplog, key, value):
    monkeypatch.setenv(key, value)

    settings = load_settings()

    assert settings.external_calendar_timeout_seconds == DEFAULT_EXTERNAL_TIMEOUT_SECONDS
    assert settings.availability_max_workers == DEFAULT_MAX_WORKERS
    assert settings.check_external_calendar is True
    assert key in caplog.text
