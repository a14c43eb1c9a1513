"""
Decide whether a merged pull request matters to end users.

Internal work (CI, tests, refactors, dependency bumps and the like) is
dropped before classification. A pull request is vetoed by a single
matching label or title pattern; anything that matches nothing is kept.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from .group_model import ChangeRequest
from .rules import SKIP_LABELS, SKIP_TITLE_PATTERNS


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def is_user_facing(change: ChangeRequest) -> bool:
    """Return ``True`` if ``change`` belongs in the changelog.

    Labels are checked before the title, so a ``chore`` label excludes a
    pull request whatever its title says.
    """
    skipped_labels = change.label_set & SKIP_LABELS
    if skipped_labels:
        logger.debug("Skipping #%s: internal label(s) %s", change.number, sorted(skipped_labels))
        return False

    title = change.title or ""
    for pattern in SKIP_TITLE_PATTERNS:
        if pattern.search(title):
            logger.debug("Skipping #%s: title matches %r", change.number, pattern.pattern)
            return False

    return True


def filter_user_facing(changes: Iterable[ChangeRequest]) -> List[ChangeRequest]:
    """Return the user-facing changes, keeping their input order."""
    return [change for change in changes if is_user_facing(change)]
