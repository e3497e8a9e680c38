from __future__ import annotations

import pytest

import check_repositories
import count_results
from github_checker.config import CheckerConfig, SEQUENTIAL
from github_checker.errors import QuotaCheckError, SearchFetchError, StorageError
from github_checker.pipeline import PipelineStats
from github_checker.storage import CheckerStorage
from models import Candidate, OutputRecord, ProbeResult


class StubPipeline:
    error: Exception | None = None
    last_config: CheckerConfig | None = None

    def __init__(self, config: CheckerConfig) -> None:
        StubPipeline.last_config = config
        self.stats = PipelineStats(total=1, probed=1, retained=0)
        self.storage = CheckerStorage(config.output_dir)

    def collect(self, refresh: bool = False):
        if self.error is not None:
            raise self.error
        return []


@pytest.fixture
def stub_pipeline(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(check_repositories, "CheckerPipeline", StubPipeline)
    monkeypatch.setattr(check_repositories, "load_dotenv", lambda: None)
    monkeypatch.delenv("CHECKER_MODE", raising=False)
    StubPipeline.error = None
    return StubPipeline


def test_success_exit_code_and_flags(stub_pipeline, tmp_path) -> None:
    code = check_repositories.main(["--sequential", "--output-dir", str(tmp_path)])

    assert code == check_repositories.EXIT_OK
    assert stub_pipeline.last_config.execution_mode == SEQUENTIAL
    assert stub_pipeline.last_config.output_dir == str(tmp_path)


@pytest.mark.parametrize(
    "error, expected",
    [
        (SearchFetchError("nothing"), check_repositories.EXIT_FETCH_FAILED),
        (StorageError("results.jsonl", "disk full"), check_repositories.EXIT_STORAGE_FAILED),
        (QuotaCheckError("down"), check_repositories.EXIT_QUOTA_FAILED),
        (KeyboardInterrupt(), check_repositories.EXIT_INTERRUPTED),
    ],
)
def test_failure_exit_codes(stub_pipeline, error, expected) -> None:
    stub_pipeline.error = error
    assert check_repositories.main([]) == expected


def test_count_results_prints_record_count(tmp_path, capsys) -> None:
    storage = CheckerStorage(str(tmp_path))
    storage.save_results([
        OutputRecord(Candidate(id=i, name=f"a/{i}"), ProbeResult(has_manifest=True, has_other_ci=True))
        for i in range(4)
    ])

    assert count_results.main([str(tmp_path)]) == 0
    assert ": 4" in capsys.readouterr().out


def test_count_results_missing_file_is_zero(tmp_path, capsys) -> None:
    assert count_results.main([str(tmp_path / "nowhere")]) == 0
    assert ": 0" in capsys.readouterr().out


@pytest.mark.parametrize(
    "name, value",
    [
        ("CHECKER_MODE", "turbo"),
        ("CHECKER_STARS_MIN", "fifty"),
        ("CHECKER_MAX_WORKERS", "0"),
    ],
)
def test_invalid_environment_exits_with_config_error(stub_pipeline, monkeypatch, capsys, name, value) -> None:
    monkeypatch.setenv(name, value)

    assert check_repositories.main([]) == check_repositories.EXIT_CONFIG_FAILED
    assert "Invalid configuration" in capsys.readouterr().out
