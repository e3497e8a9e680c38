from __future__ import annotations

from typing import Any, Callable

import pytest
import requests

from github_checker.github_api import DirectoryListing
from models import DirectoryEntry, LookupStatus


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; routes every GET through a handler."""

    def __init__(self, handler: Callable[..., FakeResponse]) -> None:
        self.handler = handler
        self.headers: dict[str, str] = {}
        self.verify = True
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, params: dict | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        return self.handler(url, params=params)


class FakeContentsAPI:
    """GitHubAPI stand-in keyed by (repo, path)."""

    def __init__(self, tree: dict[tuple[str, str], Any] | None = None, remaining: int = 5000) -> None:
        self.tree = tree or {}
        self.remaining = remaining
        self.lookups: list[tuple[str, str]] = []

    def list_directory(self, full_name: str, path: str = "") -> DirectoryListing:
        self.lookups.append((full_name, path))
        value = self.tree.get((full_name, path))
        if value is None:
            return DirectoryListing(status=LookupStatus.ABSENT)
        if isinstance(value, LookupStatus):
            return DirectoryListing(status=value, error="boom")
        entries = [DirectoryEntry(name=name, type=kind) for name, kind in value]
        return DirectoryListing(status=LookupStatus.FOUND, entries=entries)

    def rate_limit(self) -> dict[str, Any]:
        return {"rate": {"limit": 5000, "remaining": self.remaining, "reset": 0}}


class FakeGovernor:
    def __init__(self, pause: bool = False) -> None:
        self.calls = 0
        self.pause = pause

    def throttle(self) -> bool:
        self.calls += 1
        return self.pause


def files(*names: str) -> list[tuple[str, str]]:
    return [(name, "file") for name in names]


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    slept: list[float] = []
    monkeypatch.setattr("time.sleep", slept.append)
    return slept
