from __future__ import annotations

import re
from enum import Enum
from typing import Literal

InputCategory = Literal["password", "email", "text"]


class FieldKind(str, Enum):
    """Semantic role of an auth form field. The value is also the attribute keyword."""

    EMAIL = "email"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirmPassword"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"

    @property
    def pattern(self) -> re.Pattern[str]:
        return FIELD_PATTERNS[self]

    @property
    def expected_category(self) -> InputCategory:
        if self in (FieldKind.PASSWORD, FieldKind.CONFIRM_PASSWORD):
            return "password"
        if self is FieldKind.EMAIL:
            return "email"
        return "text"

    @property
    def keywords(self) -> tuple[str, ...]:
        """Substrings accepted in name/id attributes for this kind."""
        return (self.value,) + EXTRA_KEYWORDS.get(self, ())


FIELD_PATTERNS: dict[FieldKind, re.Pattern[str]] = {
    FieldKind.EMAIL: re.compile(r"email|e-mail|mail", re.IGNORECASE),
    FieldKind.PASSWORD: re.compile(r"password|passcode", re.IGNORECASE),
    FieldKind.CONFIRM_PASSWORD: re.compile(
        r"confirm(?:\s*password)?|re-?type\s*password|re-?enter\s*password|repeat\s*password",
        re.IGNORECASE,
    ),
    FieldKind.FIRST_NAME: re.compile(r"first\s*name|given", re.IGNORECASE),
    FieldKind.LAST_NAME: re.compile(r"last\s*name|surname|family", re.IGNORECASE),
}

EXTRA_KEYWORDS: dict[FieldKind, tuple[str, ...]] = {
    FieldKind.CONFIRM_PASSWORD: ("confirm", "retype", "re-enter"),
    FieldKind.EMAIL: ("mail",),
}

AUTOCOMPLETE_HINTS: dict[FieldKind, tuple[str, ...]] = {
    FieldKind.PASSWORD: ("current-password", "new-password"),
    FieldKind.CONFIRM_PASSWORD: ("confirm-password",),
    FieldKind.EMAIL: ("email",),
}

# Hints shared with the password box: only the second matching box counts.
SECOND_BOX_AUTOCOMPLETE_HINTS: dict[FieldKind, tuple[str, ...]] = {
    FieldKind.CONFIRM_PASSWORD: ("new-password",),
}

# Typing order: names first, then email, password, confirm.
FILL_ORDER: tuple[FieldKind, ...] = (
    FieldKind.FIRST_NAME,
    FieldKind.LAST_NAME,
    FieldKind.EMAIL,
    FieldKind.PASSWORD,
    FieldKind.CONFIRM_PASSWORD,
)


def text_selector(pattern: re.Pattern[str]) -> str:
    """Playwright text engine selector for a compiled pattern, e.g. ``text=/email/i``."""
    flags = "i" if pattern.flags & re.IGNORECASE else ""
    return f"text=/{pattern.pattern}/{flags}"
