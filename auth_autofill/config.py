from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="AUTOFILL_", frozen=True, extra="ignore")

    default_url: str = "https://ui.chaicode.com/auth/signup"
    headless: bool = False
    slow_mo_ms: int = 120
    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: str = "ai-browser-agent/0.3 (playwright)"
    navigation_timeout_ms: int = 30_000
    assert_timeout_ms: int = 12_000
    screenshots_dir: str = "./screenshots"
    videos_dir: str = "./videos"
    record_video: bool = True
    retries: int = 2
    retry_delay_ms: int = 400
    typing_visible_timeout_ms: int = 1500
    typing_delay_min_ms: int = 40
    typing_delay_max_ms: int = 99

    @field_validator("retries", mode="before")
    @classmethod
    def _clamp_retries(cls, value: Any) -> int:
        return max(0, int(float(value)))

    @model_validator(mode="after")
    def _check_typing_delay(self) -> "Settings":
        if self.typing_delay_min_ms < 0 or self.typing_delay_min_ms > self.typing_delay_max_ms:
            raise ValueError("typing delay range must satisfy 0 <= min <= max")
        return self

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a new Settings with the non-None overrides applied and re-validated."""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return type(self).model_validate(values)


def get_settings() -> Settings:
    return Settings()
