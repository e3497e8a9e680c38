"""
Thin client for the two GitHub REST endpoints the checker uses.

- /repos/{owner}/{repo}/contents/{path}: directory listings
- /rate_limit: remaining request quota
"""

import logging
import requests
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from models import DirectoryEntry, LookupStatus

logger = logging.getLogger(__name__)


@dataclass
class DirectoryListing:
    """Result of a contents lookup."""
    status: LookupStatus
    entries: List[DirectoryEntry] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]


class GitHubAPI:
    """
    GitHub REST client with bearer authentication.

    A single session is shared between the rate governor and the prober.
    requests.Session is used from several worker threads in parallel mode;
    only stateless GETs are issued through it.
    """

    BASE_URL = "https://api.github.com"
    USER_AGENT = "GitHub-Repo-Checker"

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token (optional, increases rate limit)
            base_url: API root, defaults to BASE_URL
            timeout: Per-request timeout in seconds
            session: Pre-built session (tests inject a fake here)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.USER_AGENT,
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("No GitHub token configured; using unauthenticated rate limit")

    def list_directory(self, full_name: str, path: str = "") -> DirectoryListing:
        """
        List a repository directory.

        Never raises for HTTP or transport failures: a 404 becomes ABSENT,
        anything else becomes UNKNOWN with the error message attached.

        Args:
            full_name: Repository full name (owner/repo)
            path: Directory path, empty for the root

        Returns:
            DirectoryListing
        """
        url = f"{self.base_url}/repos/{full_name}/contents/{path}"

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return DirectoryListing(status=LookupStatus.UNKNOWN, error=str(e))

        if response.status_code == 404:
            logger.debug("Not found: %s/%s", full_name, path)
            return DirectoryListing(status=LookupStatus.ABSENT)

        try:
            response.raise_for_status()
            items = response.json()
        except (requests.RequestException, ValueError) as e:
            return DirectoryListing(status=LookupStatus.UNKNOWN, error=str(e))

        if not isinstance(items, list):
            items = [items]  # Single file returns dict, not list

        entries = [
            DirectoryEntry(name=item.get("name", ""), type=item.get("type", "file"))
            for item in items
            if isinstance(item, dict)
        ]
        return DirectoryListing(status=LookupStatus.FOUND, entries=entries)

    def rate_limit(self) -> Dict[str, Any]:
        """
        Fetch the rate-limit status document.

        Raises:
            requests.RequestException: On transport or HTTP failure
        """
        url = f"{self.base_url}/rate_limit"
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
