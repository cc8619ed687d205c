from __future__ import annotations

import re

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from ..errors import AssertionTimeoutError


async def assert_text(page: Page, text: str, timeout_ms: int) -> bool:
    """Wait for visible text matching ``text`` (case-insensitive regex)."""
    try:
        await page.get_by_text(re.compile(text, re.IGNORECASE)).first.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise AssertionTimeoutError(f"Text not visible within {timeout_ms}ms: {text}") from exc
    return True


async def assert_selector(page: Page, selector: str, timeout_ms: int) -> bool:
    try:
        await page.locator(selector).first.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeoutError as exc:
        raise AssertionTimeoutError(f"Selector not visible within {timeout_ms}ms: {selector}") from exc
    return True
