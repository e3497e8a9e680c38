"""
Data models for the CI/manifest repository checker.

Candidates come from the search service and never change after the fetch.
Probe results are derived fresh for every run.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of a single contents lookup."""
    FOUND = "found"
    ABSENT = "absent"  # confirmed 404
    UNKNOWN = "unknown"  # transport error or unexpected status


@dataclass(frozen=True)
class DirectoryEntry:
    """One item of a contents-API directory listing."""
    name: str
    type: str  # "file", "dir", "symlink", "submodule"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


@dataclass(frozen=True)
class Candidate:
    """Repository returned by the search service."""
    id: Any
    name: str  # e.g. "expressjs/express"
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    total_issues: int = 0
    language: Optional[str] = None
    topics: List[str] = field(default_factory=list)
    license: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    last_commit: Optional[str] = None
    default_branch: Optional[str] = None

    @classmethod
    def from_search_item(cls, item: Dict[str, Any]) -> "Candidate":
        """
        Parse a raw search service item.

        Args:
            item: Item from the search response "items" array

        Returns:
            Candidate
        """
        return cls(
            id=item.get("id"),
            name=item["name"],
            description=item.get("description"),
            stars=item.get("stargazers") or 0,
            forks=item.get("forks") or 0,
            watchers=item.get("watchers") or 0,
            open_issues=item.get("openIssues") or 0,
            total_issues=item.get("totalIssues") or 0,
            language=item.get("mainLanguage"),
            topics=list(item.get("topics") or []),
            license=item.get("license"),
            created_at=item.get("createdAt"),
            updated_at=item.get("updatedAt"),
            last_commit=item.get("lastCommit"),
            default_branch=item.get("defaultBranch"),
        )

    @property
    def owner(self) -> str:
        """Extract owner from name."""
        return self.name.split("/")[0]

    @property
    def repo_name(self) -> str:
        """Extract repo name from name."""
        return self.name.split("/")[-1]

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.name}"


@dataclass(frozen=True)
class ProbeResult:
    """
    Manifest and CI detection for one repository.

    The booleans treat "absent" and "unknown" lookups alike. The status
    fields keep the distinction for callers that want to re-check
    repositories whose lookups failed.
    """
    has_manifest: bool = False
    has_native_ci: bool = False
    has_other_ci: bool = False
    root_status: LookupStatus = LookupStatus.FOUND
    workflows_status: Optional[LookupStatus] = None  # None when not looked up

    @classmethod
    def empty(cls, root_status: LookupStatus) -> "ProbeResult":
        return cls(root_status=root_status)

    @property
    def has_ci(self) -> bool:
        return self.has_native_ci or self.has_other_ci

    @property
    def qualifies(self) -> bool:
        """Manifest present and at least one kind of CI configured."""
        return self.has_manifest and self.has_ci

    @property
    def is_conclusive(self) -> bool:
        """False when a lookup failed for a reason other than 404."""
        return LookupStatus.UNKNOWN not in (self.root_status, self.workflows_status)


@dataclass(frozen=True)
class OutputRecord:
    """Candidate that passed the probe, ready for the results file."""
    candidate: Candidate
    probe: ProbeResult

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        c = self.candidate
        return {
            "id": c.id,
            "name": c.name,
            "url": c.html_url,
            "description": c.description or "No description",
            "stars": c.stars,
            "forks": c.forks,
            "watchers": c.watchers,
            "open_issues": c.open_issues,
            "total_issues": c.total_issues,
            "language": c.language,
            "topics": list(c.topics),
            "license": c.license or "None",
            "created_at": c.created_at,
            "updated_at": c.updated_at,
            "last_commit": c.last_commit,
            "default_branch": c.default_branch,
            "has_ci": self.probe.has_ci,
            "has_native_ci": self.probe.has_native_ci,
            "has_other_ci": self.probe.has_other_ci,
            "has_manifest": self.probe.has_manifest,
        }
