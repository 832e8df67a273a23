"""Tests for spaserve.http.request — immutable Request."""

import pytest

from spaserve.http.request import Request


def _request(method: str = "GET", path: str = "/", headers=(), query: bytes = b"", body=b""):
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive() -> dict:
        return messages.pop(0) if messages else {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in headers],
        "server": ("localhost", 3000),
        "client": ("127.0.0.1", 50000),
    }
    return Request.from_asgi(scope, receive)


class TestRequest:
    def test_from_asgi(self) -> None:
        req = _request("get", "/turismo")
        assert req.method == "GET"
        assert req.path == "/turismo"
        assert req.client == ("127.0.0.1", 50000)
        assert req.path_params == {}

    def test_is_head(self) -> None:
        assert _request("HEAD").is_head
        assert not _request("GET").is_head

    def test_url(self) -> None:
        assert _request(path="/oauth-callback", query=b"code=1").url == "/oauth-callback?code=1"
        assert _request(path="/turismo").url == "/turismo"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            _request().path = "/other"  # type: ignore[misc]

    def test_with_path_params(self) -> None:
        req = _request(path="/api/places/3")
        updated = req.with_path_params({"id": "3"})
        assert updated.path_params == {"id": "3"}
        assert req.path_params == {}

    def test_if_none_match(self) -> None:
        req = _request(headers=[("If-None-Match", 'W/"a-b", "c"')])
        assert req.if_none_match == ('W/"a-b"', '"c"')
        assert _request().if_none_match == ()


class TestAcceptsGzip:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("gzip, deflate, br", True),
            ("br;q=1.0, gzip;q=0.8", True),
            ("*", True),
            ("gzip;q=0", False),
            ("identity", False),
            ("gzip;q=bogus", False),
        ],
    )
    def test_values(self, value: str, expected: bool) -> None:
        assert _request(headers=[("Accept-Encoding", value)]).accepts_gzip is expected

    def test_absent(self) -> None:
        assert _request().accepts_gzip is False


class TestBody:
    async def test_body_is_cached(self) -> None:
        req = _request("POST", body=b'{"name": "Ana"}')
        assert await req.body() == b'{"name": "Ana"}'
        assert await req.body() == b'{"name": "Ana"}'

    async def test_json(self) -> None:
        req = _request("POST", body=b'{"name": "Ana"}')
        assert await req.json() == {"name": "Ana"}

    async def test_chunked_body_is_joined(self) -> None:
        messages = [
            {"type": "http.request", "body": b'{"name": ', "more_body": True},
            {"type": "http.request", "body": b'"Ana"}', "more_body": False},
        ]

        async def receive() -> dict:
            return messages.pop(0)

        scope = {"type": "http", "method": "POST", "path": "/api/contact", "headers": []}
        req = Request.from_asgi(scope, receive)
        assert await req.json() == {"name": "Ana"}

    async def test_disconnect_ends_body(self) -> None:
        async def receive() -> dict:
            return {"type": "http.disconnect"}

        scope = {"type": "http", "method": "POST", "path": "/", "headers": []}
        assert await Request.from_asgi(scope, receive).body() == b""
