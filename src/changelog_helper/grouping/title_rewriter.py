"""
Turn pull request titles into changelog entries.

:func:`clean_title` removes Conventional Commit noise from a title and
:func:`get_explanation` picks a plain-English sentence for titles that
use technical vocabulary.
"""

from __future__ import annotations

from typing import Optional

from .rules import (
    CONVENTIONAL_PREFIX,
    GENERIC_TECHNICAL_EXPLANATION,
    SIMPLE_PATTERNS,
    TECHNICAL_EXPLANATIONS,
    TECHNICAL_TERMS,
)


def clean_title(title: str) -> str:
    """Return ``title`` ready for display.

    Strips a leading ``type:`` or ``type(scope):`` prefix, drops a single
    trailing period and upper-cases the first character. Nothing else in
    the title is touched.

    >>> clean_title("fix(cli): handle empty input.")
    'Handle empty input'
    """
    cleaned = CONVENTIONAL_PREFIX.sub("", title, count=1)
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return cleaned[:1].upper() + cleaned[1:]


def get_explanation(title: Optional[str]) -> Optional[str]:
    """Return a plain-English explanation for ``title``, if it needs one.

    Titles matching one of the simple patterns never get an explanation,
    even when they contain technical words. Otherwise the first matching
    entry of the technical explanation table is used, then a generic
    sentence for any remaining technical term.
    """
    title = title or ""

    if any(pattern.search(title) for pattern in SIMPLE_PATTERNS):
        return None

    for pattern, explanation in TECHNICAL_EXPLANATIONS:
        if pattern.search(title):
            return explanation

    lowered = title.lower()
    if any(term in lowered for term in TECHNICAL_TERMS):
        return GENERIC_TECHNICAL_EXPLANATION

    return None
