"""
Field naming conventions for collection inference.

A field's name alone often says how to render it: ``dateCreated`` is a
date, ``isActive`` a boolean, ``apiKeyId`` a technical identifier.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Pattern


class FieldType(str, Enum):
    """Rendering strategy for a field."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CODE = "code"
    BADGE = "badge"
    BOOLEAN = "boolean"
    URL = "url"
    EMAIL = "email"
    HIDDEN = "hidden"

    def __str__(self) -> str:
        return self.value


def _compile(*patterns: str, ignore_case: bool = True) -> List[Pattern[str]]:
    flags = re.IGNORECASE if ignore_case else 0
    return [re.compile(pattern, flags) for pattern in patterns]


@dataclass
class FieldConventions:
    date_patterns: List[Pattern[str]] = field(default_factory=list)
    code_patterns: List[Pattern[str]] = field(default_factory=list)
    badge_patterns: List[Pattern[str]] = field(default_factory=list)
    url_patterns: List[Pattern[str]] = field(default_factory=list)
    email_patterns: List[Pattern[str]] = field(default_factory=list)
    hidden_patterns: List[Pattern[str]] = field(default_factory=list)
    boolean_patterns: List[Pattern[str]] = field(default_factory=list)


DEFAULT_CONVENTIONS = FieldConventions(
    date_patterns=_compile(
        r"^date", r"date$", r"^created", r"^updated", r"^modified", r"^expires", r"^deleted",
        r"timestamp$", r"_at$", r"_on$",
    ),
    code_patterns=_compile(
        r"^id$", r"id$", r"^uuid$", r"^key$", r"key$", r"^token$", r"token$", r"^hash$", r"hash$",
        r"^code$", r"^api",
    ),
    badge_patterns=_compile(
        r"^status$", r"^state$", r"^type$", r"^role$", r"^level$", r"^priority$", r"^category$",
        r"^tag$", r"^badge$",
    ),
    url_patterns=_compile(r"^url$", r"url$", r"^link$", r"link$", r"^href$", r"href$", r"^website$", r"^homepage$"),
    email_patterns=_compile(r"^email$", r"email$", r"^mail$", r"mail$"),
    hidden_patterns=(
        _compile(r"^_", ignore_case=False)
        + _compile(
            r"^password$", r"password$", r"^secret$", r"secret$", r"secret.*token", r"auth.*token",
            r"^salt$", r"^password.*hash$",
        )
    ),
    # camelCase prefixes need the capital letter
    boolean_patterns=(
        _compile(r"^is[A-Z]", r"^has[A-Z]", r"^can[A-Z]", r"^should[A-Z]", ignore_case=False)
        + _compile(r"^enabled$", r"^disabled$", r"^active$", r"^verified$")
    ),
)


def merge_conventions(custom: Optional[FieldConventions] = None) -> FieldConventions:
    """Extend the defaults with custom patterns; custom never replaces defaults."""
    if custom is None:
        return DEFAULT_CONVENTIONS

    return FieldConventions(
        date_patterns=DEFAULT_CONVENTIONS.date_patterns + custom.date_patterns,
        code_patterns=DEFAULT_CONVENTIONS.code_patterns + custom.code_patterns,
        badge_patterns=DEFAULT_CONVENTIONS.badge_patterns + custom.badge_patterns,
        url_patterns=DEFAULT_CONVENTIONS.url_patterns + custom.url_patterns,
        email_patterns=DEFAULT_CONVENTIONS.email_patterns + custom.email_patterns,
        hidden_patterns=DEFAULT_CONVENTIONS.hidden_patterns + custom.hidden_patterns,
        boolean_patterns=DEFAULT_CONVENTIONS.boolean_patterns + custom.boolean_patterns,
    )


def matches_pattern(field_name: str, patterns: List[Pattern[str]]) -> bool:
    return any(pattern.search(field_name) for pattern in patterns)
