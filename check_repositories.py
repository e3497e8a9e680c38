"""
Find repositories with a dependency manifest and CI configuration.

Fetches candidates from SEART (or reuses output/candidates.jsonl), probes
each one through the GitHub API and writes output/results.jsonl.

Exit codes:
    0  success
    1  candidate fetch failed or returned nothing
    2  local file read/write failed
    3  rate limit query failed
    4  invalid configuration
    130 interrupted
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from github_checker.config import CheckerConfig, PARALLEL, SEQUENTIAL
from github_checker.errors import QuotaCheckError, SearchFetchError, StorageError
from github_checker.pipeline import CheckerPipeline

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_STORAGE_FAILED = 2
EXIT_QUOTA_FAILED = 3
EXIT_CONFIG_FAILED = 4
EXIT_INTERRUPTED = 130


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--sequential",
        action="store_const",
        const=SEQUENTIAL,
        dest="mode",
        help="probe one repository at a time",
    )
    parser.add_argument(
        "--parallel",
        action="store_const",
        const=PARALLEL,
        dest="mode",
        help="probe repositories through a thread pool (default)",
    )
    parser.add_argument("--refresh", action="store_true", help="ignore cached candidates")
    parser.add_argument("--output-dir", help="directory for candidates/results files")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """메인 함수"""
    load_dotenv()
    args = parse_args(argv)

    logging.basicConfig(
        level=os.getenv("CHECKER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.mode:
        overrides["execution_mode"] = args.mode
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    try:
        config = CheckerConfig.from_env(**overrides)
    except ValueError as e:
        print(f"[ERROR] Invalid configuration: {e}")
        return EXIT_CONFIG_FAILED

    print("=" * 80)
    print("GitHub Repository Checker")
    print("=" * 80)
    if config.github_token:
        print("[OK] GITHUB_TOKEN loaded (rate limit: 5000/hour)")
    else:
        print("[WARN] GITHUB_TOKEN is not set (rate limit: 60/hour)")
    print()

    pipeline = CheckerPipeline(config)

    try:
        records = pipeline.collect(refresh=args.refresh)
    except SearchFetchError as e:
        print(f"[ERROR] {e}")
        return EXIT_FETCH_FAILED
    except StorageError as e:
        print(f"[ERROR] Storage failure: {e}")
        return EXIT_STORAGE_FAILED
    except QuotaCheckError as e:
        print(f"[ERROR] {e}")
        return EXIT_QUOTA_FAILED
    except KeyboardInterrupt:
        print("\n\nChecking was interrupted; results were not written.")
        return EXIT_INTERRUPTED

    stats = pipeline.stats
    print()
    print("=" * 80)
    print("Done!")
    print("=" * 80)
    print(f"  Candidates: {stats.total}")
    print(f"  Duplicates skipped: {stats.duplicates}")
    print(f"  Probed: {stats.probed}")
    print(f"  Inconclusive lookups: {stats.inconclusive}")
    print(f"  Failed: {stats.failed}")
    print(f"  Rate limit pauses: {stats.throttled}")
    print(f"  Retained: {len(records)}")
    print()
    print(f"Results file: {pipeline.storage.results_file}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
