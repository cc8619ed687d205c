import asyncio

from auth_autofill.agent.field_kinds import FieldKind
from auth_autofill.agent.field_resolver import resolve_field
from auth_autofill.agent.form_ranker import pick_best_root, score_root
from auth_autofill.agent.search_root import SearchRoot

from tests.fakes import FakeElement, FakeForm, FakeFrame, FakePage, FakeRoot


def email_input():
    return FakeElement(attrs={"type": "email", "name": "email"})


def password_input(name="password"):
    return FakeElement(attrs={"type": "password", "name": name})


def test_picks_form_with_most_fields():
    login = FakeForm([email_input()])
    signup = FakeForm([email_input(), password_input(), password_input("confirm")])
    page = FakePage(forms=[login, signup])

    picked = asyncio.run(pick_best_root(page))

    assert picked.score == 3
    assert picked.used_root == "form"
    assert picked.root.target.element is signup


def test_no_forms_falls_back_to_page_with_its_score():
    email = email_input()
    password = password_input()
    page = FakePage([email, password])

    picked = asyncio.run(pick_best_root(page))

    assert picked.used_root == "page"
    assert picked.score == 2
    assert asyncio.run(resolve_field(picked.root, FieldKind.EMAIL)).locator.element is email
    assert asyncio.run(resolve_field(picked.root, FieldKind.PASSWORD)).locator.element is password


def test_empty_page_scores_zero():
    picked = asyncio.run(pick_best_root(FakePage()))

    assert picked.used_root == "page"
    assert picked.score == 0


def test_zero_score_form_is_ignored():
    newsletter = FakeForm([FakeElement(attrs={"type": "checkbox", "name": "subscribe"})])
    page = FakePage([email_input()], forms=[newsletter])

    picked = asyncio.run(pick_best_root(page))

    assert picked.used_root == "page"
    assert picked.score == 1


def test_ties_keep_first_form():
    first = FakeForm([email_input(), password_input()])
    second = FakeForm([email_input(), password_input()])

    picked = asyncio.run(pick_best_root(FakePage(forms=[first, second])))

    assert picked.score == 2
    assert picked.root.target.element is first
    assert picked.root.name == "page>form[0]"


def test_forms_inside_frames_are_ranked():
    weak = FakeForm([email_input()])
    embedded = FakeForm([email_input(), password_input()])
    page = FakePage(forms=[weak], frames=[FakeFrame(forms=[embedded])])

    picked = asyncio.run(pick_best_root(page))

    assert picked.score == 2
    assert picked.root.target.element is embedded
    assert picked.root.name == "frame[0]>form[0]"


def test_frame_lookup_errors_are_skipped():
    good = FakeForm([email_input()])
    page = FakePage(forms=[good], frames=[FakeFrame(failing=["form"])])

    picked = asyncio.run(pick_best_root(page))

    assert picked.root.target.element is good


def test_score_root_counts_resolved_kinds():
    root = SearchRoot(FakeRoot([email_input(), password_input(), password_input("password_confirm")]), "page")

    assert asyncio.run(score_root(root)) == 3


def test_new_password_box_does_not_count_as_confirm():
    password = FakeElement(attrs={"type": "password", "name": "password", "autocomplete": "new-password"})
    page = FakePage([email_input(), password])

    picked = asyncio.run(pick_best_root(page))

    assert picked.score == 2
    assert asyncio.run(resolve_field(picked.root, FieldKind.CONFIRM_PASSWORD)) is None


def test_selection_is_stable_on_unchanged_page():
    page = FakePage(
        forms=[FakeForm([email_input()]), FakeForm([email_input(), password_input()])],
        frames=[FakeFrame(forms=[FakeForm([email_input(), password_input()])])],
    )

    first = asyncio.run(pick_best_root(page))
    second = asyncio.run(pick_best_root(page))

    assert (first.root.name, first.score) == (second.root.name, second.score) == ("page>form[1]", 2)
    assert first.root.target.element is second.root.target.element
