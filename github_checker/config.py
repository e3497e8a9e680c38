"""
Checker configuration.

Everything the pipeline needs (credentials, search filters, pacing) lives on
one explicitly constructed CheckerConfig that is handed to each component.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

SEQUENTIAL = "sequential"
PARALLEL = "parallel"
EXECUTION_MODES = (SEQUENTIAL, PARALLEL)


@dataclass
class SearchFilters:
    """Repository filters sent to the SEART search service."""
    language: str = "JavaScript"
    committed_min: str = "2024-02-03"
    committed_max: str = "2025-02-03"
    stars_min: int = 50
    name: str = ""
    name_equals: bool = False
    sort: str = "name,asc"


@dataclass
class CheckerConfig:
    """Configuration for the checker."""
    github_token: Optional[str] = None
    filters: SearchFilters = field(default_factory=SearchFilters)

    # Search service
    seart_url: str = "https://seart-ghs.si.usi.ch/api/r/search"
    seart_verify_ssl: bool = False
    page_size: int = 100
    max_pages: int = 30
    page_delay: float = 1.0

    # Host API
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    manifest_file: str = "package.json"

    # Rate governor
    rate_limit_buffer: int = 100
    rate_limit_cooldown: float = 3600.0

    # Batch execution
    execution_mode: str = PARALLEL
    max_workers: int = 8
    throttle_every: int = 10
    candidate_delay: float = 0.5

    output_dir: str = "output"

    def __post_init__(self):
        if self.execution_mode not in EXECUTION_MODES:
            raise ValueError(
                f"execution_mode must be one of {EXECUTION_MODES}, got {self.execution_mode!r}"
            )
        if self.throttle_every < 1:
            raise ValueError("throttle_every must be >= 1")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @classmethod
    def from_env(cls, **overrides) -> "CheckerConfig":
        """
        Build a config from process environment.

        Reads GITHUB_TOKEN plus optional CHECKER_* overrides. Keyword
        arguments win over the environment.

        Args:
            **overrides: Field values to set explicitly

        Returns:
            CheckerConfig
        """
        env = os.environ
        filters = SearchFilters(
            language=env.get("CHECKER_LANGUAGE", SearchFilters.language),
            committed_min=env.get("CHECKER_COMMITTED_MIN", SearchFilters.committed_min),
            committed_max=env.get("CHECKER_COMMITTED_MAX", SearchFilters.committed_max),
            stars_min=int(env.get("CHECKER_STARS_MIN", SearchFilters.stars_min)),
        )
        values = {
            "github_token": env.get("GITHUB_TOKEN") or None,
            "filters": filters,
            "seart_verify_ssl": _env_flag(env.get("CHECKER_SEART_VERIFY_SSL"), False),
            "execution_mode": env.get("CHECKER_MODE", PARALLEL),
            "max_workers": int(env.get("CHECKER_MAX_WORKERS", 8)),
            "output_dir": env.get("CHECKER_OUTPUT_DIR", "output"),
        }
        values.update(overrides)
        return cls(**values)


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
