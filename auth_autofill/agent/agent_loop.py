from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from ..config import Settings
from ..errors import AuthRunError
from .assertions import assert_selector, assert_text
from .auth import AuthOrchestrator, Credentials, FillResult
from .browser import BrowserSession
from .retry import with_retries


@dataclass(frozen=True)
class AuthTaskRequest:
    url: str
    credentials: Credentials = field(default_factory=Credentials)
    submit: bool = False
    assert_text: Optional[str] = None
    assert_selector: Optional[str] = None


@dataclass
class RunReport:
    url: str
    fill: FillResult
    screenshots: list[Path] = field(default_factory=list)
    video_path: Optional[Path] = None
    submitted: bool = False
    assertions: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "fill": self.fill.to_dict(),
            "screenshots": [str(path) for path in self.screenshots],
            "video_path": str(self.video_path) if self.video_path else None,
            "submitted": self.submitted,
            "assertions": dict(self.assertions),
        }


async def run_auth_steps(
    request: AuthTaskRequest,
    settings: Settings,
    browser_factory: Callable[[Settings], BrowserSession] = BrowserSession,
    orchestrator: Optional[AuthOrchestrator] = None,
) -> RunReport:
    """Open the page, detect and fill the auth form, optionally submit and verify."""
    orchestrator = orchestrator or AuthOrchestrator(settings)
    retries = settings.retries
    delay_ms = settings.retry_delay_ms

    async with browser_factory(settings) as session:
        page = session.page
        try:
            await with_retries("goto", lambda: session.goto(request.url), retries, delay_ms)

            fill = await with_retries(
                "detectAndFill", lambda: orchestrator.detect_and_fill(page, request.credentials), retries, delay_ms
            )
            logging.info("run_fill url=%s result=%s", request.url, fill.to_dict())
            report = RunReport(url=request.url, fill=fill)
            report.screenshots.append(await session.snap("after-fill"))

            if request.submit:
                await with_retries("submit", lambda: orchestrator.detect_and_submit(page), retries, delay_ms)
                report.submitted = True
                await session.wait_until_idle()
                report.screenshots.append(await session.snap("after-submit"))

                if request.assert_text:
                    report.assertions["text"] = await with_retries(
                        "assertText",
                        lambda: assert_text(page, request.assert_text, settings.assert_timeout_ms),
                        retries,
                        delay_ms,
                    )
                if request.assert_selector:
                    report.assertions["selector"] = await with_retries(
                        "assertSelector",
                        lambda: assert_selector(page, request.assert_selector, settings.assert_timeout_ms),
                        retries,
                        delay_ms,
                    )
        except Exception as exc:
            video_path = await session.close()
            logging.error("run_failed url=%s error=%s video=%s", request.url, exc, video_path)
            raise AuthRunError(str(exc), video_path=video_path) from exc

        report.video_path = await session.close()
    return report
