"""
Heuristics for sorting user-facing changes into changelog categories.

The classifier is deterministic so that it can be unit tested without a
network connection. Bug fix language is checked before feature language:
"feat: fix crash on startup" is a fix, not a feature.
"""

from __future__ import annotations

import logging
from typing import FrozenSet

from .group_model import Category, ChangeRequest, ClassifiedChange
from .rules import (
    BUG_FIX_KEYWORDS,
    BUG_FIX_LABELS,
    BUG_FIX_TITLE_PATTERNS,
    FEATURE_KEYWORDS,
    FEATURE_LABELS,
    FEATURE_TITLE_PATTERNS,
)
from .title_rewriter import clean_title, get_explanation


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def _is_bug_fix(title: str, labels: FrozenSet[str]) -> bool:
    lowered = title.lower()
    return (
        any(pattern.search(title) for pattern in BUG_FIX_TITLE_PATTERNS)
        or any(keyword in lowered for keyword in BUG_FIX_KEYWORDS)
        or bool(labels & BUG_FIX_LABELS)
    )


def _is_feature(title: str, labels: FrozenSet[str]) -> bool:
    lowered = title.lower()
    return (
        any(pattern.search(title) for pattern in FEATURE_TITLE_PATTERNS)
        or any(keyword in lowered for keyword in FEATURE_KEYWORDS)
        or bool(labels & FEATURE_LABELS)
    )


def categorize(change: ChangeRequest) -> Category:
    """Classify a change into exactly one :class:`Category`.

    Parameters
    ----------
    change : ChangeRequest
        The pull request to classify. A missing title is treated as an
        empty string.

    Returns
    -------
    Category
        ``BUG_FIX`` if the title or labels look like a fix, otherwise
        ``NEW_FEATURE`` if they look like a feature, otherwise
        ``IMPROVEMENT``.
    """
    title = change.title or ""
    labels = change.label_set

    if _is_bug_fix(title, labels):
        return Category.BUG_FIX
    if _is_feature(title, labels):
        return Category.NEW_FEATURE
    return Category.IMPROVEMENT


def classify_change(change: ChangeRequest) -> ClassifiedChange:
    """Categorize ``change`` and rewrite its title for display."""
    category = categorize(change)
    logger.debug("Classified #%s as %s", change.number, category.value)
    return ClassifiedChange(
        change=change,
        category=category,
        title=clean_title(change.title or ""),
        explanation=get_explanation(change.title or ""),
    )
