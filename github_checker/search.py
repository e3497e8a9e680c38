"""
SEART GitHub Search client.

Fetches the candidate repository list page by page.
"""

import logging
import time
import requests
import urllib3
from typing import List, Optional, Dict, Any
from dataclasses import dataclass

from github_checker.config import CheckerConfig, SearchFilters
from models import Candidate

logger = logging.getLogger(__name__)


@dataclass
class SearchParams:
    """Query filters for one search."""
    language: str
    committed_min: str
    committed_max: str
    stars_min: int
    name: str = ""
    name_equals: bool = False
    sort: str = "name,asc"

    @classmethod
    def from_filters(cls, filters: SearchFilters) -> "SearchParams":
        return cls(
            language=filters.language,
            committed_min=filters.committed_min,
            committed_max=filters.committed_max,
            stars_min=filters.stars_min,
            name=filters.name,
            name_equals=filters.name_equals,
            sort=filters.sort,
        )

    def to_query(self, page: int, size: int) -> Dict[str, Any]:
        return {
            "name": self.name,
            "nameEquals": str(self.name_equals).lower(),
            "language": self.language,
            "committedMin": self.committed_min,
            "committedMax": self.committed_max,
            "starsMin": self.stars_min,
            "sort": self.sort,
            "page": page,
            "size": size,
        }


class SeartSearch:
    """
    Search repositories via the SEART service.

    Pages start at 0. Fetching stops at the first empty page or after
    max_pages pages. Any request error discards everything fetched so far.
    """

    def __init__(
        self,
        url: str = "https://seart-ghs.si.usi.ch/api/r/search",
        page_size: int = 100,
        max_pages: int = 30,
        page_delay: float = 1.0,
        verify_ssl: bool = False,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize search client.

        Args:
            url: Search endpoint
            page_size: Items requested per page
            max_pages: Upper bound on pages fetched
            page_delay: Seconds to wait after each page
            verify_ssl: Validate the service's TLS certificate
            timeout: Per-request timeout in seconds
            session: Pre-built session (optional)
        """
        self.url = url
        self.page_size = page_size
        self.max_pages = max_pages
        self.page_delay = page_delay
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify_ssl

        if not verify_ssl:
            # The service's certificate chain does not validate; skipping
            # verification is configured through seart_verify_ssl.
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @classmethod
    def from_config(cls, config: CheckerConfig) -> "SeartSearch":
        return cls(
            url=config.seart_url,
            page_size=config.page_size,
            max_pages=config.max_pages,
            page_delay=config.page_delay,
            verify_ssl=config.seart_verify_ssl,
            timeout=config.request_timeout,
        )

    def fetch_all(self, params: SearchParams) -> List[Dict[str, Any]]:
        """
        Fetch every page of results.

        Args:
            params: Search filters

        Returns:
            Raw items in page order, or [] if any request failed
        """
        items: List[Dict[str, Any]] = []

        for page in range(self.max_pages):
            logger.info("Fetching page %d...", page + 1)
            try:
                page_items = self._fetch_page(params, page)
            except (requests.RequestException, ValueError) as e:
                logger.error("SEART API error on page %d: %s", page + 1, e)
                return []

            if not page_items:
                break

            items.extend(page_items)
            time.sleep(self.page_delay)

        logger.info("Total repositories fetched: %d", len(items))
        return items

    def _fetch_page(self, params: SearchParams, page: int) -> List[Dict[str, Any]]:
        response = self.session.get(
            self.url,
            params=params.to_query(page, self.page_size),
            timeout=self.timeout,
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ValueError("response has no 'items' array")
        return data["items"]


def parse_candidates(items: List[Dict[str, Any]]) -> List[Candidate]:
    """Convert raw items, skipping any without a repository name."""
    candidates = []
    for item in items:
        try:
            candidates.append(Candidate.from_search_item(item))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping malformed search item: %s", e)
    return candidates
