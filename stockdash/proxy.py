"""
Same-origin passthrough: the dashboard talks to `/api/*` on its own origin and
this forwards each request to the configured backend, so the backend's session
cookie stays first-party.
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import requests
from flask import Flask, Response, request

from .settings import ApiConfig
from .utils import join_url

logger = logging.getLogger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Describe the hop to the frontend, not to the backend
DROPPED_REQUEST_HEADERS = {"host", "x-forwarded-host", "x-forwarded-proto"}
# requests has already decoded and de-chunked the body
DROPPED_RESPONSE_HEADERS = {"content-encoding", "transfer-encoding", "content-length"}


@dataclass(frozen=True)
class ProxyResponse:
    status: int
    reason: str
    headers: list[tuple[str, str]]
    body: bytes


def _filter_headers(headers: Iterable[tuple[str, str]], dropped: set[str]) -> list[tuple[str, str]]:
    return [(name, value) for name, value in headers if name.lower() not in dropped]


def _upstream_headers(response: requests.Response) -> Iterable[tuple[str, str]]:
    """
    Response headers as sent, one pair per line. `response.headers` joins
    repeated names with commas, which breaks multiple Set-Cookie lines, so
    read urllib3's header dict when there is one.
    """
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        return list(raw_headers.iteritems())
    return response.headers.items()


def forward_request(
    config: ApiConfig,
    method: str,
    path: str,
    query_string: str = "",
    headers: Iterable[tuple[str, str]] = (),
    body: Optional[bytes] = None,
    session: Optional[requests.Session] = None,
) -> ProxyResponse:
    """Forwards one request to the backend and returns its response unchanged."""
    target = join_url(config.backend_api_base, path)
    if query_string:
        target = f"{target}?{query_string}"

    method = method.upper()
    data = None if method in ("GET", "HEAD") else body

    response = (session or requests).request(
        method,
        target,
        headers=dict(_filter_headers(headers, DROPPED_REQUEST_HEADERS)),
        data=data,
        allow_redirects=False,
        timeout=config.timeout,
    )
    logger.info(f"{method} {target} -> {response.status_code}")

    return ProxyResponse(
        status=response.status_code,
        reason=response.reason or "",
        headers=_filter_headers(_upstream_headers(response), DROPPED_RESPONSE_HEADERS),
        body=response.content,
    )


def create_proxy_app(config: ApiConfig, session: Optional[requests.Session] = None) -> Flask:
    app = Flask(__name__)

    @app.route("/api/", defaults={"path": ""}, methods=PROXY_METHODS)
    @app.route("/api/<path:path>", methods=PROXY_METHODS)
    def proxy(path: str):
        try:
            upstream = forward_request(
                config,
                request.method,
                path,
                query_string=request.query_string.decode("utf-8"),
                headers=request.headers.items(),
                body=request.get_data(),
                session=session,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Backend unreachable: {e}")
            return Response(str(e), status=502, mimetype="text/plain")

        status = f"{upstream.status} {upstream.reason}" if upstream.reason else upstream.status
        return Response(upstream.body, status=status, headers=upstream.headers)

    return app
