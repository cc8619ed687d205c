from fastapi.testclient import TestClient

from auth_autofill.agent.agent_loop import RunReport
from auth_autofill.agent.auth import FillResult
from auth_autofill.agent.field_kinds import FieldKind
from auth_autofill.errors import AuthRunError
from auth_autofill.server import api


client = TestClient(api.app)


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_run_returns_report(monkeypatch):
    seen = {}

    async def fake_run(request, settings):
        seen["request"] = request
        seen["settings"] = settings
        return RunReport(
            url=request.url,
            fill=FillResult(found={FieldKind.PASSWORD: True}, typed={FieldKind.PASSWORD: True}, used_root="form", score=2),
            submitted=request.submit,
        )

    monkeypatch.setattr(api, "run_auth_task_async", fake_run)

    response = client.post(
        "/runs",
        json={"url": "https://example.test/signup", "password": "pw", "submit": True, "retries": 0, "headless": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["fill"] == {"found": {"password": True}, "typed": {"password": True}, "usedRoot": "form", "score": 2}
    assert body["submitted"] is True
    assert body["video_path"] is None
    assert seen["request"].credentials.password == "pw"
    assert seen["settings"].retries == 0
    assert seen["settings"].headless is True


def test_failed_run_maps_to_bad_gateway(monkeypatch):
    async def fake_run(request, settings):
        raise AuthRunError("[submit] failed after 3 attempts: Submit button not found")

    monkeypatch.setattr(api, "run_auth_task_async", fake_run)

    response = client.post("/runs", json={"url": "https://example.test"})

    assert response.status_code == 502
    assert "Submit button not found" in response.json()["detail"]
