"""
Local storage for checker runs.

Keeps the raw candidate list between runs and writes the filtered results.
Both files are JSONL.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from github_checker.errors import StorageError
from models import OutputRecord

logger = logging.getLogger(__name__)


class CheckerStorage:
    """
    Stores checker state to JSONL files.

    Files:
    - candidates.jsonl: raw search items, reused when present
    - results.jsonl: filtered output records, rewritten every run
    """

    CANDIDATES_FILE = "candidates.jsonl"
    RESULTS_FILE = "results.jsonl"

    def __init__(self, output_dir: str = "output"):
        """
        Initialize storage.

        Args:
            output_dir: Directory holding both files
        """
        self.output_dir = Path(output_dir)
        self.candidates_file = self.output_dir / self.CANDIDATES_FILE
        self.results_file = self.output_dir / self.RESULTS_FILE

    def has_candidates(self) -> bool:
        return self.candidates_file.exists()

    def load_candidates(self) -> Optional[List[Dict[str, Any]]]:
        """
        Load cached search items.

        Returns:
            List of raw items, or None if no cache exists

        Raises:
            StorageError: If the file cannot be read or parsed
        """
        if not self.has_candidates():
            return None
        items = self._read_jsonl(self.candidates_file)
        logger.info("Loaded %d cached repositories from %s", len(items), self.candidates_file)
        return items

    def save_candidates(self, items: List[Dict[str, Any]]) -> None:
        self._write_jsonl(self.candidates_file, items)
        logger.info("Repositories saved to %s", self.candidates_file)

    def save_results(self, records: Iterable[OutputRecord]) -> None:
        """Overwrite the results file with the given records."""
        self._write_jsonl(self.results_file, (record.to_dict() for record in records))
        logger.info("Full metadata saved to %s", self.results_file)

    def load_results(self) -> List[Dict[str, Any]]:
        if not self.results_file.exists():
            return []
        return self._read_jsonl(self.results_file)

    def count_results(self) -> int:
        """Number of records in the results file (0 if it does not exist)."""
        return len(self.load_results())

    def _read_jsonl(self, file_path: Path) -> List[Dict[str, Any]]:
        rows = []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        rows.append(json.loads(line))
                    except json.JSONDecodeError as e:
                        raise StorageError(file_path, f"invalid JSON on line {line_no}: {e}") from e
        except OSError as e:
            raise StorageError(file_path, f"read failed: {e}") from e
        return rows

    def _write_jsonl(self, file_path: Path, rows: Iterable[Dict[str, Any]]) -> None:
        """
        Write rows to a temporary file, then move it over the target.

        An interrupted write never leaves a truncated file behind.
        """
        tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                for row in rows:
                    json.dump(row, f, ensure_ascii=False)
                    f.write("\n")
            os.replace(tmp_path, file_path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(file_path, f"write failed: {e}") from e
