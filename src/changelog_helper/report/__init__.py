"""
Markdown rendering and output of the changelog.
"""

from .markdown import format_date, render_markdown  # noqa: F401
from .writer import ReportWriteError, write_report  # noqa: F401
