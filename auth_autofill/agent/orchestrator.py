import asyncio
import logging
from typing import Callable, Optional

from ..config import Settings, get_settings
from .agent_loop import AuthTaskRequest, RunReport, run_auth_steps
from .browser import BrowserSession


_run_lock: asyncio.Lock | None = None
_run_lock_loop: asyncio.AbstractEventLoop | None = None


def _get_run_lock() -> asyncio.Lock:
    """Ensure only one auth run drives a browser per event loop.

    Detection assumes a single writer per page, and Playwright does not always behave
    well when multiple browser sessions start concurrently in one process. The lock is
    recreated if a new event loop is used (e.g., when calling from the CLI via
    asyncio.run).
    """

    global _run_lock, _run_lock_loop

    loop = asyncio.get_running_loop()
    if _run_lock is None or _run_lock_loop is not loop:
        _run_lock = asyncio.Lock()
        _run_lock_loop = loop

    return _run_lock


async def run_auth_task_async(
    request: AuthTaskRequest,
    settings: Optional[Settings] = None,
    browser_factory: Callable[[Settings], BrowserSession] = BrowserSession,
) -> RunReport:
    """Run one detect/fill/submit pass against ``request.url``."""

    settings = settings or get_settings()
    logging.info(
        "orchestrator: running url=%s submit=%s retries=%s headless=%s",
        request.url,
        request.submit,
        settings.retries,
        settings.headless,
    )

    async with _get_run_lock():
        return await run_auth_steps(request, settings, browser_factory=browser_factory)


def run_auth_task_blocking(request: AuthTaskRequest, settings: Optional[Settings] = None) -> RunReport:
    """Synchronous wrapper for CLI usage."""

    return asyncio.run(run_auth_task_async(request, settings))
