from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel

from ..agent.agent_loop import AuthTaskRequest
from ..agent.auth import Credentials
from ..agent.orchestrator import run_auth_task_async
from ..config import get_settings
from ..errors import AuthRunError

app = FastAPI(title="auth-autofill")


class RunRequest(BaseModel):
    url: str
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    submit: bool = False
    assert_text: str | None = None
    assert_selector: str | None = None
    retries: int | None = None
    headless: bool | None = None
    record_video: bool | None = None


class FillSummary(BaseModel):
    found: dict[str, bool]
    typed: dict[str, bool]
    usedRoot: str
    score: int


class RunResponse(BaseModel):
    url: str
    fill: FillSummary
    screenshots: list[str]
    video_path: str | None
    submitted: bool
    assertions: dict[str, bool]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/runs", response_model=RunResponse)
async def run_auth(payload: RunRequest) -> Any:
    """
    Run detect/fill (and optionally submit) against ``payload.url``.
    Runs are serialized; a failed run answers 502 with the step-annotated error.
    """

    settings = get_settings().with_overrides(
        retries=payload.retries,
        headless=payload.headless,
        record_video=payload.record_video,
    )
    request = AuthTaskRequest(
        url=payload.url,
        credentials=Credentials(
            email=payload.email,
            password=payload.password,
            confirm_password=payload.confirm_password,
            first_name=payload.first_name,
            last_name=payload.last_name,
        ),
        submit=payload.submit,
        assert_text=payload.assert_text,
        assert_selector=payload.assert_selector,
    )
    try:
        report = await run_auth_task_async(request, settings)
    except AuthRunError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return report.to_dict()
