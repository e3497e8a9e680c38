"""
GitHub repository checker for CI/manifest datasets.

This package provides a two-stage collector that:
- Searches repositories via the SEART GitHub Search service
- Probes each repository's contents via the GitHub REST API
- Keeps repositories with a dependency manifest and CI configuration
"""

from github_checker.config import CheckerConfig, SearchFilters
from github_checker.errors import CheckerError, QuotaCheckError, SearchFetchError, StorageError
from github_checker.github_api import GitHubAPI, DirectoryListing
from github_checker.pipeline import CheckerPipeline, PipelineStats
from github_checker.prober import ContentsProber
from github_checker.rate_limiter import RateGovernor
from github_checker.search import SeartSearch, SearchParams
from github_checker.storage import CheckerStorage

__all__ = [
    "CheckerConfig",
    "SearchFilters",
    "CheckerError",
    "QuotaCheckError",
    "SearchFetchError",
    "StorageError",
    "GitHubAPI",
    "DirectoryListing",
    "CheckerPipeline",
    "PipelineStats",
    "ContentsProber",
    "RateGovernor",
    "SeartSearch",
    "SearchParams",
    "CheckerStorage",
]
