import asyncio

from auth_autofill.agent.field_kinds import FieldKind
from auth_autofill.agent.scoring import (
    ElementScore,
    ElementSnapshot,
    pick_best,
    score_element,
    scored_fallback,
)
from auth_autofill.agent.search_root import SearchRoot

from tests.fakes import FakeElement, FakeRoot


def test_password_category_outranks_short_id():
    typed = ElementSnapshot(tag="input", input_type="password", width=100, height=20)
    short_id = ElementSnapshot(tag="input", input_type="text", id="pw", width=100, height=20)

    typed_score = score_element(typed, FieldKind.PASSWORD)
    short_score = score_element(short_id, FieldKind.PASSWORD)

    assert typed_score.total == 4
    assert "category" in typed_score.signals
    assert typed_score.total > short_score.total
    assert pick_best([short_score, typed_score]) == 1


def test_signals_are_additive():
    snapshot = ElementSnapshot(
        tag="input",
        input_type="email",
        name="email",
        id="email",
        placeholder="Email",
        aria_label="Email address",
        autocomplete="email",
        label_text="Email",
        parent_text="Email",
        width=10,
        height=10,
    )

    score = score_element(snapshot, FieldKind.EMAIL)

    # name, id, label, placeholder, aria, category, autocomplete, container, visible, mail
    assert score.total == 3 + 3 + 3 + 2 + 2 + 3 + 1 + 1 + 1 + 2
    assert score.has_evidence


def test_visibility_alone_is_not_a_match():
    unrelated = score_element(ElementSnapshot(tag="input", name="username", width=50, height=10), FieldKind.LAST_NAME)

    assert unrelated.total == 1
    assert not unrelated.has_evidence
    assert pick_best([unrelated]) is None


def test_confirm_needs_more_than_password_type():
    lone_password = ElementSnapshot(tag="input", input_type="password", width=50, height=10)
    named_confirm = ElementSnapshot(tag="input", input_type="password", name="password_confirm", width=50, height=10)

    assert not score_element(lone_password, FieldKind.CONFIRM_PASSWORD).has_evidence
    assert score_element(named_confirm, FieldKind.CONFIRM_PASSWORD).has_evidence


def test_mail_hint_only_for_email():
    snapshot = ElementSnapshot(tag="input", name="user_mail")

    assert "mail_hint" in score_element(snapshot, FieldKind.EMAIL).signals
    assert "mail_hint" not in score_element(snapshot, FieldKind.PASSWORD).signals


def test_ties_keep_document_order():
    scores = [ElementScore(), ElementScore(total=3, has_evidence=True), ElementScore(total=3, has_evidence=True)]

    assert pick_best(scores) == 1


def test_snapshot_from_dict_maps_browser_keys():
    snapshot = ElementSnapshot.from_dict(
        {"tag": "INPUT", "type": "Email", "ariaLabel": "Work email", "labelText": "Email", "width": "12.5", "height": None}
    )

    assert snapshot.tag == "input"
    assert snapshot.input_type == "email"
    assert snapshot.aria_label == "Work email"
    assert snapshot.label_text == "Email"
    assert snapshot.width == 12.5
    assert not snapshot.is_rendered


def test_scored_fallback_picks_highest_element():
    decoy = FakeElement(attrs={"type": "text", "name": "nickname"})
    hidden = FakeElement(attrs={"type": "hidden", "name": "surname"})
    target = FakeElement(attrs={"type": "text", "id": "family-name"}, parent_text="Surname")
    root = SearchRoot(FakeRoot([decoy, hidden, target]), "page")

    scored = asyncio.run(scored_fallback(root, FieldKind.LAST_NAME))

    assert scored is not None
    assert scored.index == 1
    assert scored.locator.element is target
    assert scored.score == 3 + 1 + 1


def test_scored_fallback_without_evidence_returns_none():
    root = SearchRoot(FakeRoot([FakeElement(attrs={"type": "text", "name": "q"})]), "page")

    assert asyncio.run(scored_fallback(root, FieldKind.FIRST_NAME)) is None
