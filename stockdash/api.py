import logging
from typing import Any, Optional

import requests

from .settings import ApiConfig
from .utils import join_url

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class RequestError(Exception):
    """
    The one error the client raises. Transport failures, non-2xx statuses and
    bodies that aren't JSON all end up here; `status` is None when no HTTP
    response was received.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ApiClient:
    """
    Thin JSON client for the inventory backend.

    All requests go through one `requests.Session`, so the session cookie set
    by `/auth/login` rides along on every later call. Nothing is retried,
    cached or deduplicated.
    """

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session if session is not None else requests.Session()

    def fetch(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        url = join_url(self.config.api_base_url, path)
        merged_headers = {**JSON_HEADERS, **(headers or {})}

        try:
            response = self.session.request(
                method,
                url,
                headers=merged_headers,
                json=body,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ {method} {url} failed: {e}")
            raise RequestError(str(e)) from e

        if not 200 <= response.status_code < 300:
            message = response.text or f"{response.status_code} {response.reason}"
            logger.warning(f"⚠️ {method} {url} -> {response.status_code}")
            raise RequestError(message, status=response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise RequestError(f"Invalid JSON from {url}", status=response.status_code) from e

    def get(self, path: str) -> Any:
        return self.fetch(path)

    def post(self, path: str, body: Any = None) -> Any:
        return self.fetch(path, method="POST", body=body)
