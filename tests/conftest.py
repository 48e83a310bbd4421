"""Pytest configuration: local package import resolution and fake HTTP sessions."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from urllib3._collections import HTTPHeaderDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `stockdash` and `main` without package installation.
    sys.path.insert(0, project_root_str)

from stockdash.api import ApiClient  # noqa: E402
from stockdash.settings import ApiConfig  # noqa: E402


def make_response(
    status: int = 200,
    body: Any = b"",
    reason: str | None = None,
    headers: dict[str, str] | list[tuple[str, str]] | None = None,
) -> requests.Response:
    """Build a real `requests.Response` without touching the network.

    Header pairs may repeat a name; like a live response, `raw.headers` keeps
    every line while `response.headers` holds the comma-joined view.
    """

    response = requests.Response()
    response.status_code = status
    response.reason = reason if reason is not None else ("OK" if status < 400 else "Error")
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    response._content = body
    response.encoding = "utf-8"
    raw_headers = HTTPHeaderDict()
    pairs = headers.items() if isinstance(headers, dict) else (headers or [])
    for name, value in pairs:
        raw_headers.add(name, value)
    response.raw = SimpleNamespace(headers=raw_headers)
    response.headers = CaseInsensitiveDict(raw_headers)
    return response


class FakeSession:
    """Stands in for `requests.Session`; replays queued responses or raises."""

    def __init__(self, *results: requests.Response | Exception):
        self.results = list(results)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def config() -> ApiConfig:
    return ApiConfig(
        api_base_url="http://backend.test/api/",
        backend_api_base="http://backend.test/api",
        timeout=5,
    )


@pytest.fixture
def client_for(config):
    """Returns a factory building an `ApiClient` over a `FakeSession`."""

    def _build(*results: requests.Response | Exception) -> ApiClient:
        return ApiClient(config, session=FakeSession(*results))

    return _build
