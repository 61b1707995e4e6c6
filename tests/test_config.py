"""Tests for environment-driven settings."""

from profile_parser.config import Settings


def test_defaults():
    settings = Settings(_env_file=None, openai_api_key="")
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.ai_timeout_seconds == 20.0
    assert settings.ai_max_retries == 1
    assert settings.scoring.position == 20


def test_retries_are_capped():
    assert Settings(_env_file=None, ai_max_retries=5).ai_max_retries == 1
    assert Settings(_env_file=None, ai_max_retries=-2).ai_max_retries == 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AI_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("SCORING__POSITION", "35")
    settings = Settings(_env_file=None)
    assert settings.ai_timeout_seconds == 5.0
    assert settings.scoring.position == 35
    assert settings.scoring.company == 20


def test_length_bounds_from_environment(monkeypatch):
    monkeypatch.setenv("SCORING__TITLE_MAX_LENGTH", "80")
    assert Settings(_env_file=None).scoring.title_max_length == 80
