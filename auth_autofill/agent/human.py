from __future__ import annotations

import logging
import random
from typing import Optional

from playwright.async_api import Error as PlaywrightError, Locator, TimeoutError as PlaywrightTimeoutError

from ..config import Settings


class HumanTypist:
    """Types text one key at a time with a random per-key delay."""

    def __init__(
        self,
        visible_timeout_ms: int = 1500,
        min_delay_ms: int = 40,
        max_delay_ms: int = 99,
        rng: Optional[random.Random] = None,
    ) -> None:
        if min_delay_ms > max_delay_ms:
            raise ValueError("min_delay_ms must not exceed max_delay_ms")
        self.visible_timeout_ms = visible_timeout_ms
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings) -> "HumanTypist":
        return cls(
            visible_timeout_ms=settings.typing_visible_timeout_ms,
            min_delay_ms=settings.typing_delay_min_ms,
            max_delay_ms=settings.typing_delay_max_ms,
        )

    def next_delay(self) -> int:
        return self.rng.randint(self.min_delay_ms, self.max_delay_ms)

    async def type(self, locator: Locator, text: str) -> bool:
        """
        Focus ``locator``, clear it, and type ``text`` key by key.

        Clearing first keeps a retried fill from doubling text typed on an earlier attempt.

        Returns False without raising when the element does not become visible in time.
        """
        try:
            await locator.wait_for(state="visible", timeout=self.visible_timeout_ms)
        except PlaywrightTimeoutError:
            logging.info("human_type: not_visible timeout_ms=%s", self.visible_timeout_ms)
            return False

        await locator.scroll_into_view_if_needed()
        await locator.focus()
        try:
            await locator.fill("")
        except PlaywrightError as exc:
            # role="textbox" widgets without contenteditable reject fill
            logging.debug("human_type: clear_failed error=%r", exc)
        for char in text:
            await locator.press_sequentially(char, delay=self.next_delay())
        return True
