"""
Rate governor for GitHub API requests.

Queries the remaining quota and pauses the caller when it runs low.
"""

import logging
import threading
import time
import requests
from typing import Optional
from dataclasses import dataclass

from github_checker.errors import QuotaCheckError
from github_checker.github_api import GitHubAPI

logger = logging.getLogger(__name__)


@dataclass
class RateLimitStatus:
    """Current rate limit status."""
    remaining: int
    limit: int
    reset_at: int  # Unix timestamp


class RateGovernor:
    """
    Pauses callers when the GitHub quota falls below a low-water mark.

    The pause is a fixed cooldown, all-or-nothing. In parallel mode several
    threads may call throttle(); they are serialised so that only one quota
    query and at most one cooldown happen at a time.
    """

    def __init__(
        self,
        api: GitHubAPI,
        buffer: int = 100,
        cooldown_seconds: float = 3600.0,
    ):
        """
        Initialize rate governor.

        Args:
            api: GitHubAPI used for the quota query
            buffer: Pause when fewer than this many requests remain
            cooldown_seconds: Length of the pause
        """
        self.api = api
        self.buffer = buffer
        self.cooldown_seconds = cooldown_seconds
        self.cached_status: Optional[RateLimitStatus] = None
        self.pauses = 0
        self._lock = threading.Lock()

    def check_rate_limit(self) -> RateLimitStatus:
        """
        Query the rate-limit endpoint.

        Raises:
            QuotaCheckError: If the query fails or the body is malformed
        """
        try:
            data = self.api.rate_limit()
            rate = data["rate"]
            status = RateLimitStatus(
                remaining=int(rate["remaining"]),
                limit=int(rate.get("limit", 0)),
                reset_at=int(rate.get("reset", 0)),
            )
        except (requests.RequestException, KeyError, TypeError, ValueError) as e:
            raise QuotaCheckError(f"Rate limit query failed: {e}") from e

        self.cached_status = status
        return status

    def remaining_quota(self) -> int:
        return self.check_rate_limit().remaining

    def throttle(self) -> bool:
        """
        Pause if the quota is below the buffer.

        Returns:
            True if the caller was paused
        """
        with self._lock:
            remaining = self.remaining_quota()
            logger.info("Rate limit remaining: %d", remaining)

            if remaining >= self.buffer:
                return False

            logger.warning(
                "Approaching rate limit (%d left). Pausing for %.0f seconds...",
                remaining, self.cooldown_seconds,
            )
            time.sleep(self.cooldown_seconds)
            self.pauses += 1
            return True
