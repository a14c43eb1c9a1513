"""
GitHub integration for changelog_helper.

This package contains the :class:`GitHubClient` which fetches recently
merged pull requests from the GitHub REST API.
"""

from .client import GitHubClient, SourceUnavailableError  # noqa: F401
