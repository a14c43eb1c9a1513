"""
Relevance filtering, classification and grouping of merged pull requests.

Everything in this package is pure: it turns a list of
:class:`~changelog_helper.grouping.group_model.ChangeRequest` objects into
a :class:`~changelog_helper.grouping.group_model.ChangelogDigest` without
touching the network or the filesystem.
"""

from .change_classifier import categorize, classify_change  # noqa: F401
from .group_model import (  # noqa: F401
    Category,
    ChangelogDigest,
    ChangeRequest,
    ClassifiedChange,
)
from .grouper import build_digest, group_by_category  # noqa: F401
from .relevance import filter_user_facing, is_user_facing  # noqa: F401
from .title_rewriter import clean_title, get_explanation  # noqa: F401
