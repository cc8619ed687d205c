from __future__ import annotations

from pathlib import Path


class AutofillError(RuntimeError):
    """Base error for the auth autofill agent."""


class SubmitNotFoundError(AutofillError):
    def __init__(self, message: str = "Submit button not found") -> None:
        super().__init__(message)


class AssertionTimeoutError(AutofillError):
    pass


class AuthRunError(AutofillError):
    """A run step failed after its retry budget; carries whatever video was recorded."""

    def __init__(self, message: str, video_path: Path | None = None) -> None:
        super().__init__(message)
        self.video_path = video_path
