"""Immutable view of one HTTP request.

The headers the fallback decides on (``If-None-Match``,
``Accept-Encoding``) are exposed as parsed properties. The body is only
read by application endpoints, on demand, and at most once.
"""

from __future__ import annotations

import json as json_module
from collections.abc import MutableMapping
from dataclasses import dataclass, field, replace
from typing import Any

from spaserve._internal.asgi import Receive
from spaserve.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as the app sees it.

    ``path_params`` is empty until the router attaches the parameters
    captured by an endpoint pattern.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    client: tuple[str, int] | None

    _receive: Receive
    # Holds the body once read; the dict itself stays mutable.
    _cache: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_head(self) -> bool:
        return self.method == "HEAD"

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def if_none_match(self) -> tuple[str, ...]:
        """Entity tags from ``If-None-Match``."""
        return tuple(self.headers.get_tokens("if-none-match"))

    @property
    def accepts_gzip(self) -> bool:
        """True if ``Accept-Encoding`` lists gzip without ``q=0``."""
        for token in self.headers.get_tokens("accept-encoding"):
            coding, _, params = token.partition(";")
            if coding.strip().lower() not in ("gzip", "*"):
                continue
            q = params.strip().lower()
            if q.startswith("q="):
                try:
                    return float(q[2:]) > 0
                except ValueError:
                    return False
            return True
        return False

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        if not self.query_string:
            return self.path
        return f"{self.path}?{self.query_string.decode('latin-1')}"

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        return replace(self, path_params=path_params)

    async def body(self) -> bytes:
        """The whole request body; later calls return the same bytes."""
        if "body" not in self._cache:
            received = bytearray()
            more_body = True
            while more_body:
                message = await self._receive()
                if message["type"] != "http.request":
                    break
                received.extend(message.get("body", b""))
                more_body = message.get("more_body", False)
            self._cache["body"] = bytes(received)
        return self._cache["body"]

    async def json(self) -> Any:
        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: MutableMapping[str, Any], receive: Receive) -> Request:
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            path_params={},
            client=tuple(client) if client else None,
            _receive=receive,
        )
