"""Tests for spaserve.testing — the in-process ASGI test client."""

from spaserve.app import App
from spaserve.http.request import Request
from spaserve.testing import TestClient
from spaserve.testing.client import build_scope


class TestTestClient:
    async def test_runs_hooks(self, make_app) -> None:
        app = make_app()
        calls: list[str] = []

        @app.on_startup
        def start() -> None:
            calls.append("start")

        @app.on_shutdown
        async def stop() -> None:
            calls.append("stop")

        async with TestClient(app):
            assert calls == ["start"]
        assert calls == ["start", "stop"]

    async def test_keeps_content_length(self, make_app) -> None:
        async with TestClient(make_app()) as client:
            response = await client.get("/robots.txt")
        assert response.header("content-length") == str(len(response.body))

    async def test_query_string_reaches_handler(self, make_app) -> None:
        app: App = make_app()

        @app.route("/api/echo")
        def echo(request: Request):
            return {"url": request.url}

        async with TestClient(app) as client:
            response = await client.get("/api/echo?q=museo")
        assert response.json() == {"url": "/api/echo?q=museo"}

    async def test_post_json(self, make_app) -> None:
        app = make_app()

        @app.route("/api/echo", methods=["POST"])
        async def echo(request: Request):
            return {"content_type": request.content_type, "body": await request.json()}

        async with TestClient(app) as client:
            response = await client.post("/api/echo", json={"a": 1})
        assert response.json() == {"content_type": "application/json", "body": {"a": 1}}


class TestBuildScope:
    def test_splits_query_and_lowercases_headers(self) -> None:
        scope = build_scope("get", "/oauth-callback?code=abc", {"If-None-Match": "*"})
        assert scope["method"] == "GET"
        assert scope["path"] == "/oauth-callback"
        assert scope["query_string"] == b"code=abc"
        assert scope["headers"] == [(b"if-none-match", b"*")]

    def test_no_query(self) -> None:
        scope = build_scope("HEAD", "/turismo")
        assert scope["query_string"] == b""
        assert scope["headers"] == []
