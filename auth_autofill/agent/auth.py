from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from playwright.async_api import Locator, Page

from ..config import Settings
from ..errors import SubmitNotFoundError
from .field_kinds import FILL_ORDER, FieldKind
from .field_resolver import Candidate, first_of, resolve_field
from .form_ranker import pick_best_root
from .human import HumanTypist
from .search_root import SearchRoot

SUBMIT_SELECTOR = 'button[type="submit"], input[type="submit"]'
BUTTON_SELECTOR = 'button, [role="button"], input[type="button"]'
SUBMIT_NAME_PATTERN = re.compile(r"sign\s?in|log\s?in|sign\s?up|register|submit|continue|next", re.IGNORECASE)


@dataclass(frozen=True)
class Credentials:
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def value_for(self, kind: FieldKind) -> Optional[str]:
        value = {
            FieldKind.EMAIL: self.email,
            FieldKind.PASSWORD: self.password,
            FieldKind.CONFIRM_PASSWORD: self.confirm_password,
            FieldKind.FIRST_NAME: self.first_name,
            FieldKind.LAST_NAME: self.last_name,
        }[kind]
        return value or None


@dataclass
class FillResult:
    found: Dict[FieldKind, bool] = field(default_factory=dict)
    typed: Dict[FieldKind, bool] = field(default_factory=dict)
    used_root: str = "page"
    score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": {kind.value: hit for kind, hit in self.found.items()},
            "typed": {kind.value: ok for kind, ok in self.typed.items()},
            "usedRoot": self.used_root,
            "score": self.score,
        }


async def find_submit(root: SearchRoot) -> Optional[Locator]:
    """Explicit submit control, then a button named like a submit, then any button."""
    found = await first_of([root.locator(SUBMIT_SELECTOR)])
    if found is not None:
        return found
    if root.supports_semantic_queries:
        return await first_of([root.by_role("button", name=SUBMIT_NAME_PATTERN), root.by_role("button")])
    return await first_of([root.locator(BUTTON_SELECTOR)])


class AuthOrchestrator:
    def __init__(self, settings: Settings, typist: Optional[HumanTypist] = None) -> None:
        self.settings = settings
        self.typist = typist or HumanTypist.from_settings(settings)

    async def detect_and_fill(self, page: Page, credentials: Credentials) -> FillResult:
        picked = await pick_best_root(page)
        resolved: Dict[FieldKind, Optional[Candidate]] = {}
        for kind in FieldKind:
            resolved[kind] = await resolve_field(picked.root, kind)

        result = FillResult(
            found={kind: candidate is not None for kind, candidate in resolved.items()},
            used_root=picked.used_root,
            score=picked.score,
        )
        for kind in FILL_ORDER:
            candidate = resolved[kind]
            value = credentials.value_for(kind)
            if candidate is None or value is None:
                continue
            result.typed[kind] = await self.typist.type(candidate.locator, value)
            logging.info(
                "field_typed kind=%s strategy=%s ok=%s", kind.value, candidate.strategy.value, result.typed[kind]
            )
        return result

    async def detect_and_submit(self, page: Page) -> None:
        picked = await pick_best_root(page)
        submit = await find_submit(picked.root)
        if submit is None:
            raise SubmitNotFoundError()
        await submit.scroll_into_view_if_needed()
        await submit.click()
        logging.info("submit_clicked root=%s", picked.root.name)
