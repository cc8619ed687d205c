from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Page

from .field_kinds import FieldKind
from .field_resolver import resolve_field
from .search_root import SearchRoot, document_roots, form_root, page_root

FORM_SELECTOR = "form"


@dataclass
class FormCandidate:
    root: SearchRoot
    score: int

    @property
    def used_root(self) -> str:
        return "form" if self.root.kind == "form" else "page"


async def score_root(root: SearchRoot) -> int:
    """Number of field kinds (0-5) that resolve under ``root``."""
    score = 0
    for kind in FieldKind:
        if await resolve_field(root, kind) is not None:
            score += 1
    return score


async def pick_best_root(page: Page) -> FormCandidate:
    """
    Rank every form in the document and its nested frames by resolvable field count.

    Ties keep the first form in document, then frame, then container order. When no
    form scores above zero the whole page is used, scored the same way.
    """
    best: Optional[FormCandidate] = None

    for parent in document_roots(page):
        forms = parent.locator(FORM_SELECTOR)
        try:
            count = await forms.count()
        except Exception as exc:
            logging.debug("form_ranker: count_failed root=%s error=%r", parent.name, exc)
            continue
        for idx in range(count):
            root = form_root(forms.nth(idx), parent, idx)
            score = await score_root(root)
            logging.debug("form_ranker: scored root=%s score=%s", root.name, score)
            if score > 0 and (best is None or score > best.score):
                best = FormCandidate(root=root, score=score)

    if best is None:
        root = page_root(page)
        best = FormCandidate(root=root, score=await score_root(root))

    logging.info("form_ranker: picked root=%s score=%s", best.root.name, best.score)
    return best
