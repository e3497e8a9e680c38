"""
Exceptions raised by the repository checker.

Only failures that should stop a run are modelled here. Transport errors
inside a single repository probe are logged and absorbed by the prober.
"""


class CheckerError(Exception):
    """Base class for fatal checker errors."""


class QuotaCheckError(CheckerError):
    """The GitHub rate-limit endpoint could not be queried."""


class SearchFetchError(CheckerError):
    """The search service produced no candidates."""


class StorageError(CheckerError):
    """Reading or writing a local candidate/result file failed."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
