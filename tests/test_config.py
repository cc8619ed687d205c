import pytest
from pydantic import ValidationError

from auth_autofill.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.retries >= 0
    assert settings.typing_delay_min_ms <= settings.typing_delay_max_ms


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("AUTOFILL_HEADLESS", "true")
    monkeypatch.setenv("AUTOFILL_RETRIES", "4")

    settings = Settings()

    assert settings.headless is True
    assert settings.retries == 4


def test_negative_and_fractional_retries_are_clamped():
    assert Settings(retries=-3).retries == 0
    assert Settings(retries="2.7").retries == 2


def test_with_overrides_skips_none_and_returns_new_instance():
    base = Settings(retries=2, headless=False)

    updated = base.with_overrides(retries=5, headless=None, record_video=False)

    assert updated is not base
    assert updated.retries == 5
    assert updated.headless is False
    assert updated.record_video is False
    assert base.retries == 2


def test_settings_are_immutable():
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.retries = 9


def test_inverted_typing_delay_rejected():
    with pytest.raises(ValidationError):
        Settings(typing_delay_min_ms=200, typing_delay_max_ms=100)
