from __future__ import annotations

"""Cascade that maps a semantic field kind to one visible editable element under a root."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from playwright.async_api import Locator

from .field_kinds import AUTOCOMPLETE_HINTS, SECOND_BOX_AUTOCOMPLETE_HINTS, FieldKind, text_selector
from .scoring import scored_fallback
from .search_root import SearchRoot

MAX_VISIBLE_PROBE = 10

NEAR_INPUT_XPATH = "xpath=following::input[1]"

CONTENT_EDITABLE_SELECTOR = '[contenteditable=""], [contenteditable="true"], [role="textbox"]'


class Strategy(str, Enum):
    LABEL_OR_PLACEHOLDER = "label_or_placeholder"
    TYPE_NAME_ID = "type_name_id"
    ROLE_TEXTBOX = "role_textbox"
    ARIA_HINTS = "aria_hints"
    NEARBY_TEXT = "nearby_text"
    CONTENT_EDITABLE = "content_editable"
    SCORED_FALLBACK = "scored_fallback"


@dataclass
class Candidate:
    """Transient handle to the element a strategy picked. Never cached across calls."""

    locator: Locator
    kind: FieldKind
    strategy: Strategy
    root: SearchRoot


async def first_visible(locator: Optional[Locator], skip: int = 0) -> Optional[Locator]:
    """First visible match in document order, after skipping ``skip`` visible ones."""
    if locator is None:
        return None
    count = await locator.count()
    seen = 0
    for idx in range(min(count, MAX_VISIBLE_PROBE)):
        item = locator.nth(idx)
        if not await item.is_visible():
            continue
        if seen == skip:
            return item
        seen += 1
    return None


async def first_of(locators: Sequence[Optional[Locator]], skip: int = 0) -> Optional[Locator]:
    for locator in locators:
        try:
            found = await first_visible(locator, skip=skip)
        except Exception as exc:
            logging.debug("first_of: lookup_failed error=%r", exc)
            continue
        if found is not None:
            return found
    return None


def category_selector(kind: FieldKind) -> str:
    return f'input[type="{kind.expected_category}"]'


def keyword_selector(kind: FieldKind) -> str:
    parts: List[str] = []
    for keyword in kind.keywords:
        parts.append(f'input[name*="{keyword}" i]')
        parts.append(f'input[id*="{keyword}" i]')
    if kind is FieldKind.EMAIL:
        parts.append('input[inputmode="email"]')
    return ", ".join(parts)


def aria_hint_selector(kind: FieldKind) -> str:
    hints = [
        f'[aria-label*="{kind.value}" i]',
        f'[data-testid*="{kind.value}" i]',
        f'[data-qa*="{kind.value}" i]',
    ]
    hints.extend(f'[autocomplete="{value}"]' for value in AUTOCOMPLETE_HINTS.get(kind, ()))
    return ", ".join(hints)


async def by_label_or_placeholder(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    if not root.supports_semantic_queries:
        return None
    return await first_of([root.by_label(kind.pattern), root.by_placeholder(kind.pattern)])


async def by_type_name_id(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    if kind is FieldKind.CONFIRM_PASSWORD:
        # The first password box belongs to the password field; confirm takes the second.
        named = await first_of([root.locator(keyword_selector(kind))])
        if named is not None:
            return named
        return await first_of([root.locator(category_selector(kind))], skip=1)
    union = f"{category_selector(kind)}, {keyword_selector(kind)}"
    return await first_of([root.locator(union)])


async def by_role_textbox(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    near = root.locator(f"{text_selector(kind.pattern)} >> {NEAR_INPUT_XPATH}")
    if not root.supports_semantic_queries:
        return await first_of([near])
    return await first_of([root.by_role("textbox", name=kind.pattern), near])


async def by_aria_hints(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    found = await first_of([root.locator(aria_hint_selector(kind))])
    if found is not None:
        return found
    shared = SECOND_BOX_AUTOCOMPLETE_HINTS.get(kind)
    if not shared:
        return None
    selector = ", ".join(f'[autocomplete="{value}"]' for value in shared)
    return await first_of([root.locator(selector)], skip=1)


async def by_nearby_text(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    anchor = root.locator(text_selector(kind.pattern)).first
    return await first_of([anchor.locator(NEAR_INPUT_XPATH)])


async def by_content_editable(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    # No kind filtering: any custom editable widget qualifies.
    return await first_of([root.locator(CONTENT_EDITABLE_SELECTOR)])


async def by_scored_fallback(root: SearchRoot, kind: FieldKind) -> Optional[Locator]:
    scored = await scored_fallback(root, kind)
    return scored.locator if scored else None


StrategyFn = Callable[[SearchRoot, FieldKind], Awaitable[Optional[Locator]]]

STRATEGIES: Tuple[Tuple[Strategy, StrategyFn], ...] = (
    (Strategy.LABEL_OR_PLACEHOLDER, by_label_or_placeholder),
    (Strategy.TYPE_NAME_ID, by_type_name_id),
    (Strategy.ROLE_TEXTBOX, by_role_textbox),
    (Strategy.ARIA_HINTS, by_aria_hints),
    (Strategy.NEARBY_TEXT, by_nearby_text),
    (Strategy.CONTENT_EDITABLE, by_content_editable),
    (Strategy.SCORED_FALLBACK, by_scored_fallback),
)

STRATEGY_FUNCTIONS = dict(STRATEGIES)


async def run_strategy(strategy: Strategy, root: SearchRoot, kind: FieldKind) -> Optional[Candidate]:
    """Run a single strategy; lookup errors count as a miss."""
    try:
        locator = await STRATEGY_FUNCTIONS[strategy](root, kind)
    except Exception as exc:
        logging.debug(
            "field_strategy_failed root=%s kind=%s strategy=%s error=%r", root.name, kind.value, strategy.value, exc
        )
        return None
    if locator is None:
        return None
    return Candidate(locator=locator, kind=kind, strategy=strategy, root=root)


async def resolve_field(root: SearchRoot, kind: FieldKind) -> Optional[Candidate]:
    """Try each strategy in order and return the first visible match, or None."""
    for strategy, _ in STRATEGIES:
        candidate = await run_strategy(strategy, root, kind)
        if candidate is not None:
            logging.debug("field_resolved root=%s kind=%s strategy=%s", root.name, kind.value, strategy.value)
            return candidate
    logging.debug("field_not_found root=%s kind=%s", root.name, kind.value)
    return None
