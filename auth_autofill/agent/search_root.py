from __future__ import annotations

"""Queryable roots the field cascade runs against: the page, a nested frame, or a form."""

import re
from typing import Any, List, Literal, Optional

from playwright.async_api import Frame, Locator, Page

RootKind = Literal["page", "frame", "form"]


class SearchRoot:
    """
    Basic-capability root: only selector queries (CSS, ``text=`` and ``xpath=``).

    Strategies that need label, placeholder or accessible-role lookups receive ``None``
    from this variant and fall back to selector-only heuristics.
    """

    supports_semantic_queries = False

    def __init__(self, target: Any, kind: RootKind, name: str = "") -> None:
        self.target = target
        self.kind = kind
        self.name = name or kind

    def locator(self, selector: str) -> Locator:
        return self.target.locator(selector)

    def by_label(self, pattern: re.Pattern[str]) -> Optional[Locator]:
        return None

    def by_placeholder(self, pattern: re.Pattern[str]) -> Optional[Locator]:
        return None

    def by_role(self, role: str, name: Optional[re.Pattern[str]] = None) -> Optional[Locator]:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class SemanticSearchRoot(SearchRoot):
    """Full-capability root backed by a Playwright Page, Frame or Locator."""

    supports_semantic_queries = True

    def by_label(self, pattern: re.Pattern[str]) -> Optional[Locator]:
        return self.target.get_by_label(pattern)

    def by_placeholder(self, pattern: re.Pattern[str]) -> Optional[Locator]:
        return self.target.get_by_placeholder(pattern)

    def by_role(self, role: str, name: Optional[re.Pattern[str]] = None) -> Optional[Locator]:
        if name is None:
            return self.target.get_by_role(role)
        return self.target.get_by_role(role, name=name)


def page_root(page: Page) -> SemanticSearchRoot:
    return SemanticSearchRoot(page, "page", "page")


def frame_roots(page: Page) -> List[SemanticSearchRoot]:
    """Every currently attached nested frame, excluding the main frame."""
    frames: List[Frame] = [frame for frame in page.frames if frame != page.main_frame]
    return [SemanticSearchRoot(frame, "frame", f"frame[{idx}]") for idx, frame in enumerate(frames)]


def document_roots(page: Page) -> List[SemanticSearchRoot]:
    return [page_root(page)] + frame_roots(page)


def form_root(form: Locator, parent: SearchRoot, index: int) -> SearchRoot:
    """A form inside ``parent``; keeps the parent's capability variant."""
    return type(parent)(form, "form", f"{parent.name}>form[{index}]")
