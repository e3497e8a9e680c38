"""
Repository contents prober.

Detects a dependency manifest and CI configuration from at most two
directory listings, without cloning or reading file contents.
"""

import logging
from typing import FrozenSet, Optional, Tuple

from models import LookupStatus, ProbeResult
from github_checker.github_api import GitHubAPI, DirectoryListing

logger = logging.getLogger(__name__)


class ContentsProber:
    """
    Probe a GitHub repository for a manifest and CI files.

    Checks:
    - Root listing: manifest file, third-party CI marker files
    - .github/workflows listing: GitHub Actions workflow files

    Lookup failures never raise; they yield False for the affected flags.
    """

    # Third-party CI marker files at the repository root
    OTHER_CI_FILES: FrozenSet[str] = frozenset({
        ".travis.yml",
        ".gitlab-ci.yml",
        "Jenkinsfile",
        "azure-pipelines.yml",
        "appveyor.yml",
        "bitrise.yml",
        "wercker.yml",
    })

    NATIVE_CI_DIR = ".github"
    WORKFLOWS_PATH = ".github/workflows"
    WORKFLOW_EXTENSIONS: Tuple[str, ...] = (".yml", ".yaml")

    def __init__(self, api: GitHubAPI, manifest_file: str = "package.json"):
        """
        Initialize prober.

        Args:
            api: GitHubAPI client
            manifest_file: Dependency manifest to look for at the root
        """
        self.api = api
        self.manifest_file = manifest_file

    def probe(self, full_name: str) -> ProbeResult:
        """
        Probe one repository.

        Args:
            full_name: Repository full name (owner/repo)

        Returns:
            ProbeResult
        """
        root = self.api.list_directory(full_name)
        if root.status is not LookupStatus.FOUND:
            self._report_failure(full_name, "repo contents", root)
            return ProbeResult.empty(root.status)

        names = set(root.names)
        has_manifest = self.manifest_file in names
        has_other_ci = not names.isdisjoint(self.OTHER_CI_FILES)

        has_native_ci = False
        workflows_status: Optional[LookupStatus] = None
        if any(e.is_dir and e.name == self.NATIVE_CI_DIR for e in root.entries):
            workflows = self.api.list_directory(full_name, self.WORKFLOWS_PATH)
            workflows_status = workflows.status
            if workflows.status is LookupStatus.FOUND:
                has_native_ci = any(
                    name.endswith(self.WORKFLOW_EXTENSIONS) for name in workflows.names
                )
            else:
                self._report_failure(full_name, "GitHub Actions workflows", workflows)

        return ProbeResult(
            has_manifest=has_manifest,
            has_native_ci=has_native_ci,
            has_other_ci=has_other_ci,
            root_status=LookupStatus.FOUND,
            workflows_status=workflows_status,
        )

    @staticmethod
    def _report_failure(full_name: str, what: str, listing: DirectoryListing) -> None:
        # 404 is the normal "path absent" answer
        if listing.status is LookupStatus.UNKNOWN:
            logger.warning("Error checking %s for %s: %s", what, full_name, listing.error)
