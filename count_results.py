"""Print the number of repositories in the results file."""

import sys

from github_checker.errors import StorageError
from github_checker.storage import CheckerStorage


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    storage = CheckerStorage(argv[0] if argv else "output")

    try:
        count = storage.count_results()
    except StorageError as e:
        print(f"[ERROR] {e}")
        return 2

    print(f"Total repositories in {storage.results_file}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
