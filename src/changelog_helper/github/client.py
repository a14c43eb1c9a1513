"""
Client for fetching merged pull requests from the GitHub REST API.

The client issues a single request to the ``/pulls`` endpoint and keeps
the pull requests merged since a given moment. Any failure to obtain a
usable answer (connection errors, HTTP errors, rate limiting, malformed
JSON) is raised as :class:`SourceUnavailableError`. Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from changelog_helper.grouping.group_model import ChangeRequest


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


USER_AGENT = "changelog-generator"


class SourceUnavailableError(Exception):
    """Raised when merged pull requests cannot be fetched."""

    pass


@dataclass
class GitHubClient:
    """Client for reading pull requests of one GitHub repository.

    Parameters
    ----------
    owner : str
        Repository owner, e.g. ``"anthropics"``.
    repo : str
        Repository name, e.g. ``"claude-code"``.
    token : str, optional
        Personal access token. Unauthenticated requests work for public
        repositories but have a much lower rate limit.
    per_page : int, optional
        Number of pull requests requested. Only one page is fetched.
    request_timeout : float, optional
        Timeout in seconds for the HTTP request.
    api_url : str, optional
        Base URL of the REST API.
    """

    owner: str
    repo: str
    token: Optional[str] = None
    per_page: int = 100
    request_timeout: float = 30.0
    api_url: str = "https://api.github.com"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def _endpoint(self) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.owner}/{self.repo}/pulls"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list_closed_pull_requests(self) -> List[Dict[str, Any]]:
        """Return the most recently updated closed pull requests as raw JSON.

        Raises
        ------
        SourceUnavailableError
            If the request fails or the response cannot be used.
        """
        params = {
            "state": "closed",
            "sort": "updated",
            "direction": "desc",
            "per_page": str(self.per_page),
        }
        url = self._endpoint()
        logger.debug("Requesting %s with params %s", url, params)
        try:
            response = requests.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to connect to GitHub: %s", exc)
            raise SourceUnavailableError(str(exc)) from exc
        if response.status_code != 200:
            logger.error("GitHub returned status %s: %s", response.status_code, response.text)
            raise SourceUnavailableError(
                f"GitHub API error: {response.status_code} {response.reason}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Failed to parse GitHub response: %s", exc)
            raise SourceUnavailableError("Failed to parse GitHub response") from exc
        if not isinstance(data, list):
            raise SourceUnavailableError("Unexpected response structure from GitHub")
        return data

    def fetch_merged(self, since: datetime) -> List[ChangeRequest]:
        """Return pull requests merged at or after ``since``.

        Closed-but-unmerged pull requests are dropped. The order of the
        API response is kept.

        Parameters
        ----------
        since : datetime
            Timezone-aware start of the window.
        """
        merged: List[ChangeRequest] = []
        for payload in self.list_closed_pull_requests():
            if not isinstance(payload, dict) or not payload.get("merged_at"):
                continue
            try:
                change = ChangeRequest.from_api(payload)
            except (AttributeError, TypeError, ValueError) as exc:
                logger.warning("Ignoring pull request %s: %s", payload.get("number"), exc)
                continue
            if change.merged_at is not None and change.merged_at >= since:
                merged.append(change)
        logger.debug("%d of the fetched pull requests were merged since %s", len(merged), since)
        return merged
