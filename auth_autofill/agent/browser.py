from __future__ import annotations

import logging
import time
from pathlib import Path

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..config import Settings


class BrowserSession:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.browser: Browser | None = None
        self.context: BrowserContext | None = None
        self.page: Page | None = None
        self._playwright: Playwright | None = None
        self.screenshots_dir = Path(settings.screenshots_dir)
        self.videos_dir = Path(settings.videos_dir)
        self.video_path: Path | None = None
        self._closed = False

    async def __aenter__(self) -> "BrowserSession":
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        self.videos_dir.mkdir(parents=True, exist_ok=True)

        self._playwright = await async_playwright().start()
        self.browser = await self._playwright.chromium.launch(
            headless=self.settings.headless,
            slow_mo=self.settings.slow_mo_ms,
        )
        self.context = await self.browser.new_context(
            viewport={"width": self.settings.viewport_width, "height": self.settings.viewport_height},
            user_agent=self.settings.user_agent,
            record_video_dir=str(self.videos_dir) if self.settings.record_video else None,
        )
        self.page = await self.context.new_page()
        self.page.set_default_timeout(self.settings.navigation_timeout_ms)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _require_page(self) -> Page:
        if not self.page:
            raise RuntimeError("Browser page is not initialized. Use within an async context manager.")
        return self.page

    async def goto(self, url: str) -> None:
        """
        Navigate to a URL and give the app a moment to settle.
        """
        page = self._require_page()
        await page.goto(url, wait_until="domcontentloaded")
        await self.wait_until_idle()

    async def wait_until_idle(self) -> None:
        page = self._require_page()
        try:
            await page.wait_for_load_state("networkidle")
        except PlaywrightTimeoutError:
            logging.info("browser: networkidle wait timed out, continuing anyway")

    async def snap(self, label: str) -> Path:
        page = self._require_page()
        path = self.screenshots_dir / f"{int(time.time() * 1000)}-{label}.png"
        await page.screenshot(path=str(path))
        return path

    async def close(self) -> Path | None:
        """Close context and browser; returns the recorded video path, if any."""
        if self._closed:
            return self.video_path
        self._closed = True

        video = self.page.video if self.page else None
        if self.context:
            try:
                await self.context.close()
            except Exception as exc:  # noqa: BLE001
                logging.warning("browser: context_close_failed error=%s", exc)
        if video:
            try:
                self.video_path = Path(await video.path())
            except Exception as exc:  # noqa: BLE001
                logging.warning("browser: video_path_unavailable error=%s", exc)
        if self.browser:
            try:
                await self.browser.close()
            except Exception as exc:  # noqa: BLE001
                logging.warning("browser: browser_close_failed error=%s", exc)
        if self._playwright:
            await self._playwright.stop()
        return self.video_path

    def __repr__(self) -> str:
        return f"BrowserSession(headless={self.settings.headless}, video={self.settings.record_video})"
