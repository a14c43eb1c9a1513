"""
Render a grouped changelog as Markdown.

The layout is relied upon by people who diff generated changelogs, so
it is kept stable: title, date range, rule, one section per non-empty
category, rule, generation date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Mapping, Optional, Sequence, Union

from changelog_helper.grouping.group_model import Category, ClassifiedChange

DateLike = Union[date, datetime]

NO_CHANGES_NOTICE = "*No user-facing changes in this period.*"
RULE = "---"


def format_date(value: DateLike) -> str:
    """Format ``value`` like ``January 5, 2025``.

    Timezone-aware datetimes are converted to local time first, so the
    dates match the calendar of whoever runs the tool.
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return f"{value:%B} {value.day}, {value.year}"


def _format_entry(change: ClassifiedChange) -> List[str]:
    lines = [f"- **{change.title}** ([#{change.number}]({change.url})) by @{change.author}"]
    if change.explanation:
        lines.append(f"  _What this means: {change.explanation}_")
    return lines


def render_markdown(
    groups: Mapping[Category, Sequence[ClassifiedChange]],
    start: DateLike,
    end: DateLike,
    project_name: str = "Claude Code",
    generated_on: Optional[DateLike] = None,
) -> str:
    """Render ``groups`` as a Markdown document.

    Parameters
    ----------
    groups : Mapping[Category, Sequence[ClassifiedChange]]
        Changes per category, as returned by
        :func:`~changelog_helper.grouping.grouper.group_by_category`.
    start, end : date or datetime
        Bounds of the reported window.
    project_name : str
        Used in the document title.
    generated_on : date or datetime, optional
        Date shown in the footer. Defaults to today.

    Returns
    -------
    str
        The document, without a trailing newline.
    """
    if generated_on is None:
        generated_on = date.today()

    lines: List[str] = [
        f"# {project_name} Changelog",
        "",
        f"**{format_date(start)} - {format_date(end)}**",
        "",
        RULE,
        "",
    ]

    has_changes = False
    # Iterate over Category rather than the mapping so sections always
    # come out in the same order.
    for category in Category:
        changes = groups.get(category) or []
        if not changes:
            continue
        has_changes = True
        lines.append(f"## {category.value}")
        lines.append("")
        for change in changes:
            lines.extend(_format_entry(change))
        lines.append("")

    if not has_changes:
        lines.append(NO_CHANGES_NOTICE)
        lines.append("")

    lines.append(RULE)
    lines.append("")
    lines.append(f"*Generated on {format_date(generated_on)}*")
    return "\n".join(lines)
