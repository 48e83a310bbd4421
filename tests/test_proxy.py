"""Same-origin proxy tests: header filtering, body handling and Flask wiring."""

from __future__ import annotations

import requests

from conftest import FakeSession, make_response
from stockdash.proxy import create_proxy_app, forward_request


def test_forward_request_strips_hop_headers_and_keeps_query(config) -> None:
    session = FakeSession(
        make_response(
            200,
            {"ok": True},
            headers={"Content-Type": "application/json", "Content-Encoding": "gzip", "Set-Cookie": "sid=1"},
        )
    )

    upstream = forward_request(
        config,
        "post",
        "auth/login",
        query_string="next=%2F",
        headers=[("Host", "front.test"), ("X-Forwarded-Proto", "https"), ("Cookie", "sid=0")],
        body=b'{"email": "a@b.c"}',
        session=session,
    )

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://backend.test/api/auth/login?next=%2F"
    assert call["headers"] == {"Cookie": "sid=0"}
    assert call["data"] == b'{"email": "a@b.c"}'
    assert call["allow_redirects"] is False

    header_names = {name.lower() for name, _ in upstream.headers}
    assert "content-encoding" not in header_names
    assert "set-cookie" in header_names
    assert upstream.status == 200


def test_forward_request_drops_body_for_get(config) -> None:
    session = FakeSession(make_response(200, []))

    forward_request(config, "GET", "products", body=b"ignored", session=session)

    assert session.calls[0]["data"] is None


def test_proxy_app_passes_status_and_body_through(config) -> None:
    session = FakeSession(make_response(404, "not found", reason="Not Found", headers={"Content-Type": "text/plain"}))
    app = create_proxy_app(config, session=session)

    response = app.test_client().get("/api/reports/stock?from=2024-01-01")

    assert response.status_code == 404
    assert response.get_data(as_text=True) == "not found"
    assert session.calls[0]["url"] == "http://backend.test/api/reports/stock?from=2024-01-01"


def test_proxy_app_forwards_post_body(config) -> None:
    session = FakeSession(make_response(201, {"id": "p1"}, headers={"Content-Type": "application/json"}))
    app = create_proxy_app(config, session=session)

    response = app.test_client().post("/api/products", json={"name": "Widget"})

    assert response.status_code == 201
    assert response.get_json() == {"id": "p1"}
    assert session.calls[0]["method"] == "POST"
    assert b"Widget" in session.calls[0]["data"]


def test_proxy_app_reports_unreachable_backend(config) -> None:
    app = create_proxy_app(config, session=FakeSession(requests.ConnectionError("refused")))

    response = app.test_client().get("/api/products")

    assert response.status_code == 502


TWO_COOKIES = [
    ("Content-Type", "application/json"),
    ("Set-Cookie", "sid=abc; Path=/; HttpOnly"),
    ("Set-Cookie", "csrf=xyz; Path=/"),
]


def test_forward_request_keeps_repeated_set_cookie_lines(config) -> None:
    upstream_response = make_response(200, {"ok": True}, headers=TWO_COOKIES)
    assert upstream_response.headers["Set-Cookie"] == "sid=abc; Path=/; HttpOnly, csrf=xyz; Path=/"

    upstream = forward_request(config, "POST", "auth/login", body=b"{}", session=FakeSession(upstream_response))

    assert [value for name, value in upstream.headers if name.lower() == "set-cookie"] == [
        "sid=abc; Path=/; HttpOnly",
        "csrf=xyz; Path=/",
    ]


def test_proxy_app_sends_each_cookie_as_its_own_header(config) -> None:
    session = FakeSession(make_response(200, {"ok": True}, headers=TWO_COOKIES))
    app = create_proxy_app(config, session=session)

    response = app.test_client().post("/api/auth/login", json={})

    assert response.headers.getlist("Set-Cookie") == ["sid=abc; Path=/; HttpOnly", "csrf=xyz; Path=/"]
