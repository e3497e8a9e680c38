"""
Checker pipeline orchestrator.

Stage 1 fetches (or reloads) the candidate list, stage 2 probes every
candidate and keeps the ones with a manifest and CI configuration.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from github_checker.config import CheckerConfig, SEQUENTIAL
from github_checker.errors import QuotaCheckError, SearchFetchError
from github_checker.github_api import GitHubAPI
from github_checker.prober import ContentsProber
from github_checker.rate_limiter import RateGovernor
from github_checker.search import SeartSearch, SearchParams, parse_candidates
from github_checker.storage import CheckerStorage
from models import Candidate, OutputRecord, ProbeResult

logger = logging.getLogger(__name__)


@dataclass
class PipelineStats:
    """Counters for one batch run."""
    total: int = 0
    duplicates: int = 0
    probed: int = 0
    failed: int = 0
    inconclusive: int = 0
    retained: int = 0
    throttled: int = 0


class CheckerPipeline:
    """
    Main pipeline orchestrator.

    Candidates are probed either one at a time (sequential mode) or through
    a bounded thread pool (parallel mode). The mode is fixed for the whole
    run by config.execution_mode.
    """

    def __init__(
        self,
        config: CheckerConfig,
        api: Optional[GitHubAPI] = None,
        search: Optional[SeartSearch] = None,
        prober: Optional[ContentsProber] = None,
        governor: Optional[RateGovernor] = None,
        storage: Optional[CheckerStorage] = None,
    ):
        """
        Initialize checker pipeline.

        Args:
            config: CheckerConfig with settings
            api, search, prober, governor, storage: Component overrides;
                built from config when omitted
        """
        self.config = config

        if api is None and (prober is None or governor is None):
            api = GitHubAPI(
                token=config.github_token,
                base_url=config.github_api_url,
                timeout=config.request_timeout,
            )
        self.search = search or SeartSearch.from_config(config)
        self.prober = prober or ContentsProber(api, manifest_file=config.manifest_file)
        self.governor = governor or RateGovernor(
            api,
            buffer=config.rate_limit_buffer,
            cooldown_seconds=config.rate_limit_cooldown,
        )
        self.storage = storage or CheckerStorage(config.output_dir)
        self.stats = PipelineStats()

    def collect(self, refresh: bool = False) -> List[OutputRecord]:
        """
        Run both stages and overwrite the results file.

        Args:
            refresh: Ignore the cached candidate list and search again

        Returns:
            Retained output records

        Raises:
            SearchFetchError: If no candidates could be obtained
            StorageError: On local file failures
            QuotaCheckError: If the rate limit cannot be queried
        """
        candidates = self.load_candidates(refresh=refresh)
        logger.info(
            "Found %d repositories. Checking CI/CD & %s (%s)...",
            len(candidates), self.config.manifest_file, self.config.execution_mode,
        )

        records = self.run(candidates)
        self.storage.save_results(records)
        return records

    def load_candidates(self, refresh: bool = False) -> List[Candidate]:
        items = None if refresh else self.storage.load_candidates()

        if items is None:
            logger.info("No saved repository data found. Fetching from SEART API...")
            items = self.search.fetch_all(SearchParams.from_filters(self.config.filters))
            if items:
                self.storage.save_candidates(items)

        if not items:
            raise SearchFetchError("No repositories found. Check the SEART API settings.")
        return parse_candidates(items)

    def run(self, candidates: Sequence[Candidate]) -> List[OutputRecord]:
        """
        Probe candidates and keep those with a manifest and CI.

        Args:
            candidates: Candidate list; duplicates by id are probed once

        Returns:
            OutputRecords in candidate order
        """
        self.stats = PipelineStats(total=len(candidates))
        unique = self._deduplicate(candidates)

        if self.config.execution_mode == SEQUENTIAL:
            probes = self._run_sequential(unique)
        else:
            probes = self._run_parallel(unique)

        records = []
        for candidate, probe in zip(unique, probes):
            if probe is None:
                self.stats.failed += 1
                continue
            self.stats.probed += 1
            if not probe.is_conclusive:
                self.stats.inconclusive += 1
            if probe.qualifies:
                records.append(OutputRecord(candidate=candidate, probe=probe))

        self.stats.retained = len(records)
        logger.info(
            "Checked %d repositories: %d retained, %d failed",
            len(unique), self.stats.retained, self.stats.failed,
        )
        return records

    def _run_sequential(self, candidates: Sequence[Candidate]) -> List[Optional[ProbeResult]]:
        probes = []
        for candidate in candidates:
            if self.governor.throttle():
                self.stats.throttled += 1
            probes.append(self._probe(candidate))
            time.sleep(self.config.candidate_delay)
        return probes

    def _run_parallel(self, candidates: Sequence[Candidate]) -> List[Optional[ProbeResult]]:
        # The governor check only delays further submissions; probes already
        # handed to the pool keep running.
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = []
            for index, candidate in enumerate(candidates):
                if index % self.config.throttle_every == 0 and self.governor.throttle():
                    self.stats.throttled += 1
                futures.append(executor.submit(self._probe, candidate))
            return [future.result() for future in futures]

    def _probe(self, candidate: Candidate) -> Optional[ProbeResult]:
        """Probe one candidate, returning None if it failed unexpectedly."""
        try:
            return self.prober.probe(candidate.name)
        except QuotaCheckError:
            raise
        except Exception as e:
            logger.error("Error processing %s: %s", candidate.name, e)
            return None

    def _deduplicate(self, candidates: Sequence[Candidate]) -> List[Candidate]:
        seen = set()
        unique = []
        for candidate in candidates:
            key: Any = candidate.id if candidate.id is not None else candidate.name
            if key in seen:
                self.stats.duplicates += 1
                continue
            seen.add(key)
            unique.append(candidate)
        return unique
