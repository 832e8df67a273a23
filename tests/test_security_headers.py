"""Tests for SecurityHeadersMiddleware — baseline headers on every response."""

from spaserve.http.request import Request
from spaserve.http.response import Response, json_response
from spaserve.middleware.security_headers import (
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
    apply_security_headers,
)


def _request() -> Request:
    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request.from_asgi({"type": "http", "method": "GET", "path": "/"}, receive)


async def _apply(middleware: SecurityHeadersMiddleware, response: Response) -> Response:
    async def next_handler(request: Request) -> Response:
        return response

    return await middleware(_request(), next_handler)


class TestSecurityHeaders:
    async def test_defaults(self) -> None:
        response = await _apply(SecurityHeadersMiddleware(), Response("<html></html>"))
        assert response.header("x-content-type-options") == "nosniff"
        assert response.header("x-frame-options") == "SAMEORIGIN"
        assert response.header("referrer-policy") == "no-referrer"
        assert response.header("cross-origin-opener-policy") == "same-origin"
        assert response.header("content-security-policy") is None
        assert response.header("strict-transport-security") is None

    async def test_applies_to_non_html(self) -> None:
        response = await _apply(SecurityHeadersMiddleware(), json_response({"status": "OK"}))
        assert response.header("x-content-type-options") == "nosniff"

    async def test_custom_config(self) -> None:
        middleware = SecurityHeadersMiddleware(
            SecurityHeadersConfig(
                x_frame_options="DENY",
                content_security_policy="default-src 'self'",
                strict_transport_security="max-age=63072000; includeSubDomains",
                cross_origin_opener_policy=None,
            )
        )
        response = await _apply(middleware, Response("ok"))
        assert response.header("x-frame-options") == "DENY"
        assert response.header("content-security-policy") == "default-src 'self'"
        assert (
            response.header("strict-transport-security") == "max-age=63072000; includeSubDomains"
        )
        assert response.header("cross-origin-opener-policy") is None

    async def test_handler_headers_win(self) -> None:
        original = Response("ok").with_header("X-Frame-Options", "DENY")
        response = await _apply(SecurityHeadersMiddleware(), original)
        assert [v for k, v in response.headers if k.lower() == "x-frame-options"] == ["DENY"]


class TestApplySecurityHeaders:
    def test_error_response(self) -> None:
        response = apply_security_headers(
            Response("Not Found", status=404), SecurityHeadersConfig()
        )
        assert response.status == 404
        assert response.header("x-content-type-options") == "nosniff"
        assert response.header("cross-origin-opener-policy") == "same-origin"

    def test_applying_twice_adds_nothing(self) -> None:
        config = SecurityHeadersConfig(strict_transport_security="max-age=63072000")
        once = apply_security_headers(Response("ok"), config)
        assert apply_security_headers(once, config).headers == once.headers
