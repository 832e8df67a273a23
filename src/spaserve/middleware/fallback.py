"""SPA fallback middleware.

Serves the built bundle: hashed assets with an immutable cache policy,
other static files with a short one, and the application shell for
navigational routes. Missing assets are real 404s.

Reserved endpoints and non GET/HEAD requests fall through to the next
handler (the endpoint router).
"""

import errno
import logging

from spaserve.errors import AssetStoreError, BadRequest, NotFound
from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.middleware.protocol import Next
from spaserve.routing.classify import (
    Failed,
    FallbackPolicy,
    Missing,
    PassThrough,
    Rejected,
    ServeAsset,
    ServeShell,
    classify,
)
from spaserve.routing.table import RouteTable
from spaserve.store import AssetStore

logger = logging.getLogger("spaserve.server")


class SPAFallback:
    """Middleware that classifies each request and serves the result.

    Usage::

        store = AssetStore("dist")
        app.add_middleware(SPAFallback(
            store,
            routes=RouteTable(SITE_ROUTES),
            reserved=RouteTable(["/health"]),
        ))

    ``App`` installs one automatically from its ``ServerConfig``.
    """

    __slots__ = ("_policy", "_reserved", "_routes", "_store")

    def __init__(
        self,
        store: AssetStore,
        *,
        routes: RouteTable,
        reserved: RouteTable | None = None,
        policy: FallbackPolicy | None = None,
    ) -> None:
        self._store = store
        self._routes = routes
        self._reserved = reserved or RouteTable()
        self._policy = policy or FallbackPolicy(index=store.index)

    @property
    def policy(self) -> FallbackPolicy:
        return self._policy

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve an asset or the shell, raise a 404/400, or fall through."""
        result = classify(
            request.method,
            request.path,
            routes=self._routes,
            reserved=self._reserved,
            store=self._store,
            policy=self._policy,
        )

        match result:
            case PassThrough():
                return await next(request)
            case ServeAsset(path=path, cache_control=cache_control):
                return self._serve_file(request, path, cache_control)
            case ServeShell(cache_control=cache_control):
                return self._serve_shell(request, cache_control)
            case Missing(reason=reason):
                raise NotFound(reason)
            case Rejected(reason=reason):
                raise BadRequest(reason)
            case Failed(error=error):
                raise error

        msg = f"Unhandled classification: {result!r}"
        raise AssertionError(msg)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _serve_file(self, request: Request, relative: str, cache_control: str) -> Response:
        """Build a file response, or 304 when the client's copy is current."""
        info = self._store.stat(relative)
        headers = (
            ("Cache-Control", cache_control),
            ("ETag", info.etag),
        )

        if _etag_matches(info.etag, request.if_none_match):
            return Response(status=304, content_type=info.content_type, headers=headers)

        body = self._store.read(relative)
        return Response(body=body, content_type=info.content_type, headers=headers)

    def _serve_shell(self, request: Request, cache_control: str) -> Response:
        """The shell must exist; its absence is a server fault, not a 404."""
        index = self._policy.index
        try:
            return self._serve_file(request, index, cache_control)
        except NotFound:
            logger.error("Shell document %r disappeared from %s", index, self._store.root)
            missing = FileNotFoundError(errno.ENOENT, "shell document missing", index)
            raise AssetStoreError(index, missing) from None


def _etag_matches(etag: str, candidates: tuple[str, ...]) -> bool:
    """Weak comparison, as ``If-None-Match`` requires."""
    if not candidates:
        return False
    if "*" in candidates:
        return True
    bare = etag.removeprefix("W/")
    return any(c.removeprefix("W/") == bare for c in candidates)
