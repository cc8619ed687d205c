from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


async def with_retries(
    label: str,
    operation: Callable[[], Awaitable[T]],
    retries: int = 2,
    delay_ms: int = 400,
) -> T:
    """
    Run ``operation`` up to ``retries + 1`` times, sleeping ``delay_ms`` between attempts.

    Each attempt calls the factory again, so the wrapped step re-queries the page from
    scratch. The last error is re-raised with its message rewritten to
    ``[label] failed after N attempts: <original message>``.
    """
    attempts = max(0, retries) + 1

    for attempt in range(1, attempts):
        try:
            return await operation()
        except Exception as exc:  # noqa: BLE001
            logging.warning("retry_attempt_failed label=%s attempt=%s/%s error=%s", label, attempt, attempts, exc)
            await asyncio.sleep(delay_ms / 1000)

    try:
        return await operation()
    except Exception as exc:
        logging.warning("retry_attempt_failed label=%s attempt=%s/%s error=%s", label, attempts, attempts, exc)
        original = exc.args[0] if exc.args else exc.__class__.__name__
        exc.args = (f"[{label}] failed after {attempts} attempts: {original}",) + tuple(exc.args[1:])
        raise
