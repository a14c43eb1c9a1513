"""
Data models for changelog grouping.

A :class:`ChangeRequest` is a merged pull request as delivered by the
source collaborator. After classification it is wrapped in a
:class:`ClassifiedChange` carrying its :class:`Category`, a cleaned
display title and an optional plain-language explanation. A
:class:`ChangelogDigest` holds the grouped result of a whole run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple


# GitHub shows deleted accounts as "ghost"; use the same name when the
# payload has no user at all.
UNKNOWN_AUTHOR = "ghost"


class Category(str, Enum):
    """Changelog sections, declared in the order they are rendered."""

    NEW_FEATURE = "New Features"
    IMPROVEMENT = "Improvements"
    BUG_FIX = "Bug Fixes"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # fromisoformat() only accepts a trailing "Z" on Python 3.11+
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        # GitHub timestamps are UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class ChangeRequest:
    """A merged pull request.

    Attributes
    ----------
    number : int
        Pull request number.
    title : str
        Raw pull request title.
    labels : Tuple[str, ...]
        Label names as reported by GitHub.
    author : str
        Login of the pull request author.
    url : str
        Link to the pull request on github.com.
    merged_at : Optional[datetime]
        Merge timestamp, ``None`` if the pull request was never merged.
    """

    number: int
    title: str
    labels: Tuple[str, ...] = ()
    author: str = UNKNOWN_AUTHOR
    url: str = ""
    merged_at: Optional[datetime] = None

    @property
    def label_set(self) -> FrozenSet[str]:
        """Lower-cased label names."""
        return frozenset(label.lower() for label in self.labels)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "ChangeRequest":
        """Build a :class:`ChangeRequest` from a GitHub pull request object.

        Missing or mistyped fields degrade instead of failing: a title that
        is not a string becomes the empty string, a missing user becomes
        :data:`UNKNOWN_AUTHOR` and labels without a string name are skipped.
        """
        user = payload.get("user")
        if not isinstance(user, dict):
            user = {}
        login = user.get("login")
        title = payload.get("title")
        url = payload.get("html_url")
        labels = tuple(
            label["name"]
            for label in payload.get("labels") or []
            if isinstance(label, dict) and isinstance(label.get("name"), str) and label["name"]
        )
        return cls(
            number=int(payload.get("number") or 0),
            title=title if isinstance(title, str) else "",
            labels=labels,
            author=login if isinstance(login, str) and login else UNKNOWN_AUTHOR,
            url=url if isinstance(url, str) else "",
            merged_at=_parse_timestamp(payload.get("merged_at")),
        )


@dataclass(frozen=True)
class ClassifiedChange:
    """A user-facing change ready to be rendered."""

    change: ChangeRequest
    category: Category
    title: str
    explanation: Optional[str] = None

    @property
    def number(self) -> int:
        return self.change.number

    @property
    def url(self) -> str:
        return self.change.url

    @property
    def author(self) -> str:
        return self.change.author


@dataclass(frozen=True)
class ChangelogDigest:
    """Outcome of one pipeline run.

    Attributes
    ----------
    total : int
        Number of merged pull requests fed into the pipeline.
    user_facing : int
        Number of pull requests that passed the relevance filter.
    groups : Dict[Category, List[ClassifiedChange]]
        Accepted changes per category. Every category is present.
    """

    total: int
    user_facing: int
    groups: Dict[Category, List[ClassifiedChange]] = field(default_factory=dict)

    def count(self, category: Category) -> int:
        return len(self.groups.get(category, []))

    @property
    def is_empty(self) -> bool:
        return not any(self.groups.values())
