"""
Partition classified changes by category.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .change_classifier import classify_change
from .group_model import Category, ChangelogDigest, ChangeRequest, ClassifiedChange
from .relevance import filter_user_facing


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def group_by_category(
    changes: Iterable[ClassifiedChange],
) -> Dict[Category, List[ClassifiedChange]]:
    """Group ``changes`` by category.

    Every :class:`Category` is present in the result, in declaration
    order, even when it has no changes. Within a category the input order
    is preserved.
    """
    grouped: Dict[Category, List[ClassifiedChange]] = {category: [] for category in Category}
    for change in changes:
        grouped[change.category].append(change)
    return grouped


def build_digest(changes: Sequence[ChangeRequest]) -> ChangelogDigest:
    """Run the relevance filter, classifier and grouper over ``changes``."""
    user_facing = filter_user_facing(changes)
    groups = group_by_category(classify_change(change) for change in user_facing)
    logger.debug(
        "Kept %d of %d changes: %s",
        len(user_facing),
        len(changes),
        ", ".join(f"{category.value}={len(items)}" for category, items in groups.items()),
    )
    return ChangelogDigest(total=len(changes), user_facing=len(user_facing), groups=groups)
