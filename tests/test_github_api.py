from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse, FakeSession
from github_checker.github_api import GitHubAPI
from models import LookupStatus


def make_api(handler, token: str | None = "secret") -> tuple[GitHubAPI, FakeSession]:
    session = FakeSession(handler)
    return GitHubAPI(token=token, session=session), session


def test_bearer_token_and_headers_are_set() -> None:
    api, session = make_api(lambda url, params=None: FakeResponse(200, []))
    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["Accept"] == "application/vnd.github.v3+json"
    assert session.headers["User-Agent"] == "GitHub-Repo-Checker"


def test_missing_token_sends_no_authorization_header() -> None:
    _, session = make_api(lambda url, params=None: FakeResponse(200, []), token=None)
    assert "Authorization" not in session.headers


def test_list_directory_parses_entries_and_builds_url() -> None:
    payload = [
        {"name": "package.json", "type": "file", "sha": "a"},
        {"name": ".github", "type": "dir", "sha": "b"},
    ]
    api, session = make_api(lambda url, params=None: FakeResponse(200, payload))

    listing = api.list_directory("acme/demo", ".github/workflows")

    assert listing.status is LookupStatus.FOUND
    assert listing.names == ["package.json", ".github"]
    assert listing.entries[1].is_dir
    assert session.calls[0]["url"] == "https://api.github.com/repos/acme/demo/contents/.github/workflows"
    assert session.calls[0]["timeout"] == 30.0


def test_list_directory_wraps_single_file_response() -> None:
    api, _ = make_api(lambda url, params=None: FakeResponse(200, {"name": "README.md", "type": "file"}))
    listing = api.list_directory("acme/demo", "README.md")
    assert listing.names == ["README.md"]


def test_list_directory_404_is_absent() -> None:
    api, _ = make_api(lambda url, params=None: FakeResponse(404, {"message": "Not Found"}))
    listing = api.list_directory("acme/missing")
    assert listing.status is LookupStatus.ABSENT
    assert listing.entries == []
    assert listing.error is None


@pytest.mark.parametrize("status_code", [403, 500, 502])
def test_list_directory_http_errors_are_unknown(status_code: int) -> None:
    api, _ = make_api(lambda url, params=None: FakeResponse(status_code, {}))
    listing = api.list_directory("acme/demo")
    assert listing.status is LookupStatus.UNKNOWN
    assert str(status_code) in listing.error


def test_list_directory_transport_error_is_unknown() -> None:
    def handler(url, params=None):
        raise requests.ConnectionError("connection reset")

    api, _ = make_api(handler)
    listing = api.list_directory("acme/demo")
    assert listing.status is LookupStatus.UNKNOWN
    assert "connection reset" in listing.error


def test_list_directory_invalid_json_is_unknown() -> None:
    api, _ = make_api(lambda url, params=None: FakeResponse(200, ValueError("bad json")))
    assert api.list_directory("acme/demo").status is LookupStatus.UNKNOWN


def test_rate_limit_raises_on_http_error() -> None:
    api, _ = make_api(lambda url, params=None: FakeResponse(401, {}))
    with pytest.raises(requests.HTTPError):
        api.rate_limit()
