"""
Tests for environment-driven settings.
"""

from pathlib import Path

from creative_studio.config import DEFAULT_API_BASE, StudioSettings


ENV_VARS = [
    "GROQ_API_KEY",
    "STUDIO_API_BASE",
    "STUDIO_STORE_PATH",
    "STUDIO_PREVIEW_DIR",
    "STUDIO_OUTPUT_DIR",
    "STUDIO_DEBOUNCE_SECONDS",
]


def test_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    settings = StudioSettings.from_env(dotenv=False)

    assert settings.api_key is None
    assert settings.api_base == DEFAULT_API_BASE
    assert settings.debounce_seconds == 0.5


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GROQ_API_KEY", "sk-env")
    monkeypatch.setenv("STUDIO_API_BASE", "http://localhost:8080/v1")
    monkeypatch.setenv("STUDIO_STORE_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("STUDIO_DEBOUNCE_SECONDS", "0.1")

    settings = StudioSettings.from_env(dotenv=False)

    assert settings.api_key == "sk-env"
    assert settings.api_base == "http://localhost:8080/v1"
    assert settings.store_path == Path(tmp_path / "s.json")
    assert settings.debounce_seconds == 0.1


def test_blank_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "")
    assert StudioSettings.from_env(dotenv=False).api_key is None
