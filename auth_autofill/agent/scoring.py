from __future__ import annotations

"""Weighted-signal scoring of editable elements, used as the last resolution strategy."""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from playwright.async_api import Locator

from .field_kinds import FieldKind
from .search_root import SearchRoot

EDITABLE_SELECTOR = ", ".join(
    [
        'input:not([type="hidden"]):not([type="checkbox"]):not([type="radio"])',
        "textarea",
        '[role="textbox"]',
        '[contenteditable=""]',
        '[contenteditable="true"]',
    ]
)

SIGNAL_WEIGHTS: dict[str, int] = {
    "name": 3,
    "id": 3,
    "label": 3,
    "placeholder": 2,
    "aria_label": 2,
    "category": 3,
    "autocomplete": 1,
    "container_text": 1,
    "visible": 1,
    "mail_hint": 2,
}

# Signals that cannot identify a field on their own. Rendered size says nothing about
# the field, and a password-typed box is only a confirm box if something names it so.
NON_EVIDENCE_SIGNALS: dict[FieldKind, frozenset[str]] = {
    kind: frozenset({"visible", "category"} if kind is FieldKind.CONFIRM_PASSWORD else {"visible"})
    for kind in FieldKind
}

SNAPSHOT_SCRIPT = """
(el) => {
    const attr = (name) => (el.getAttribute(name) || "").toString();
    let labelText = "";
    if (el.labels && el.labels.length) {
        labelText = Array.from(el.labels).map((l) => l.textContent || "").join(" ");
    } else if (el.id) {
        const lab = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
        if (lab) labelText = lab.textContent || "";
    }
    const rect = el.getBoundingClientRect();
    return {
        tag: (el.tagName || "").toLowerCase(),
        type: attr("type").toLowerCase(),
        name: attr("name"),
        id: attr("id"),
        placeholder: attr("placeholder"),
        ariaLabel: attr("aria-label"),
        autocomplete: attr("autocomplete"),
        labelText: labelText.trim(),
        parentText: ((el.parentElement && el.parentElement.textContent) || "").trim(),
        width: rect.width,
        height: rect.height,
    };
}
"""


@dataclass(frozen=True)
class ElementSnapshot:
    """Serializable view of the attributes the scorer reads from one element."""

    tag: str = ""
    input_type: str = ""
    name: str = ""
    id: str = ""
    placeholder: str = ""
    aria_label: str = ""
    autocomplete: str = ""
    label_text: str = ""
    parent_text: str = ""
    width: float = 0.0
    height: float = 0.0

    @property
    def is_rendered(self) -> bool:
        return self.width > 0 and self.height > 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ElementSnapshot":
        def text(key: str) -> str:
            value = data.get(key)
            return str(value) if value is not None else ""

        def number(key: str) -> float:
            try:
                return float(data.get(key) or 0.0)
            except (TypeError, ValueError):
                return 0.0

        return cls(
            tag=text("tag").lower(),
            input_type=text("type").lower(),
            name=text("name"),
            id=text("id"),
            placeholder=text("placeholder"),
            aria_label=text("ariaLabel"),
            autocomplete=text("autocomplete"),
            label_text=text("labelText"),
            parent_text=text("parentText"),
            width=number("width"),
            height=number("height"),
        )


@dataclass(frozen=True)
class ElementScore:
    total: int = 0
    signals: Tuple[str, ...] = field(default_factory=tuple)
    has_evidence: bool = False


@dataclass
class ScoredCandidate:
    locator: Locator
    kind: FieldKind
    score: int
    signals: Tuple[str, ...]
    index: int


def score_element(snapshot: ElementSnapshot, kind: FieldKind) -> ElementScore:
    """Sum independent weighted signals for ``snapshot`` against ``kind``. Pure."""
    pattern = kind.pattern
    signals: list[str] = []

    def check(signal: str, matched: bool) -> None:
        if matched:
            signals.append(signal)

    check("name", bool(pattern.search(snapshot.name)))
    check("id", bool(pattern.search(snapshot.id)))
    check("label", bool(snapshot.label_text and pattern.search(snapshot.label_text)))
    check("placeholder", bool(pattern.search(snapshot.placeholder)))
    check("aria_label", bool(pattern.search(snapshot.aria_label)))
    check(
        "category",
        kind.expected_category in ("password", "email") and snapshot.input_type == kind.expected_category,
    )
    check("autocomplete", bool(pattern.search(snapshot.autocomplete)))
    check("container_text", bool(pattern.search(snapshot.parent_text)))
    check("visible", snapshot.is_rendered)
    if kind is FieldKind.EMAIL:
        joined = " ".join([snapshot.name, snapshot.id, snapshot.placeholder, snapshot.aria_label]).lower()
        check("mail_hint", "mail" in joined)

    total = sum(SIGNAL_WEIGHTS[signal] for signal in signals)
    evidence = any(signal not in NON_EVIDENCE_SIGNALS[kind] for signal in signals)
    return ElementScore(total=total, signals=tuple(signals), has_evidence=evidence)


def pick_best(scores: list[ElementScore]) -> Optional[int]:
    """Index of the strictly highest evidenced score; ties keep the earliest."""
    best_index: Optional[int] = None
    best_total = 0
    for idx, score in enumerate(scores):
        if not score.has_evidence or score.total <= 0:
            continue
        if score.total > best_total:
            best_index = idx
            best_total = score.total
    return best_index


async def snapshot_element(locator: Locator) -> Optional[ElementSnapshot]:
    try:
        data = await locator.evaluate(SNAPSHOT_SCRIPT)
    except Exception as exc:
        logging.debug("scored_fallback: snapshot_failed error=%r", exc)
        return None
    if not isinstance(data, Mapping):
        return None
    return ElementSnapshot.from_dict(data)


async def scored_fallback(root: SearchRoot, kind: FieldKind) -> Optional[ScoredCandidate]:
    """
    Score every plausibly editable element under ``root`` and return the best one.

    One evaluation per element, so this runs after every cheaper strategy has missed.
    """
    candidates = root.locator(EDITABLE_SELECTOR)
    try:
        count = await candidates.count()
    except Exception as exc:
        logging.debug("scored_fallback: count_failed root=%s kind=%s error=%r", root.name, kind.value, exc)
        return None
    if not count:
        return None

    scores: list[ElementScore] = []
    for idx in range(count):
        snapshot = await snapshot_element(candidates.nth(idx))
        scores.append(score_element(snapshot, kind) if snapshot else ElementScore())

    best = pick_best(scores)
    if best is None:
        logging.debug("scored_fallback: no_match root=%s kind=%s elements=%s", root.name, kind.value, count)
        return None

    winner = scores[best]
    logging.debug(
        "scored_fallback: winner root=%s kind=%s index=%s score=%s signals=%s",
        root.name,
        kind.value,
        best,
        winner.total,
        ",".join(winner.signals),
    )
    return ScoredCandidate(
        locator=candidates.nth(best),
        kind=kind,
        score=winner.total,
        signals=winner.signals,
        index=best,
    )
