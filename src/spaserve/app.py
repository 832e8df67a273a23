"""spaserve application class.

Mutable during setup (endpoint registration, middleware, error handlers).
Frozen at runtime when app.run() or __call__() is first invoked: the
asset store is validated and the route tables are compiled once.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve._internal.invoke import invoke
from spaserve.config import ServerConfig
from spaserve.middleware.compression import CompressionConfig, CompressionMiddleware
from spaserve.middleware.fallback import SPAFallback
from spaserve.middleware.protocol import Middleware
from spaserve.middleware.security_headers import (
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
)
from spaserve.routing.classify import FallbackPolicy
from spaserve.routing.route import Route
from spaserve.routing.router import Router
from spaserve.routing.table import RouteTable
from spaserve.server.handler import handle_request
from spaserve.server.health import make_health_endpoint, make_introspection_endpoint
from spaserve.store import AssetStore

logger = logging.getLogger("spaserve.app")

Handler: TypeAlias = Callable[..., Any]


@dataclass(slots=True)
class _PendingRoute:
    """An endpoint waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """The spaserve application.

    Serves a built single-page application from ``config.dist_dir``:
    hashed assets, other static files, the shell for client routes, plus
    ``/health`` and any endpoints registered with ``@app.route``.

    Usage::

        app = App(ServerConfig(dist_dir="dist"))

        @app.route("/api/contact", methods=["POST"])
        async def contact(request: Request):
            ...

        app.run()

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even when several workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_reserved",
        # Compiled state (populated by _freeze)
        "_router",
        "_routes",
        "_security",
        "_shutdown_hooks",
        "_startup_hooks",
        "_store",
        "config",
    )

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        store: AssetStore | None = None,
    ) -> None:
        self.config: ServerConfig = config or ServerConfig()
        self._store: AssetStore = store or AssetStore(self.config.dist_dir, index=self.config.index)
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, Handler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None
        self._routes: RouteTable | None = None
        self._reserved: RouteTable | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._security: SecurityHeadersConfig | None = None

    # -- Endpoint registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register an endpoint handler via decorator.

        Endpoints are reserved: the SPA fallback never answers for their
        paths, whatever the method.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters.
            methods: HTTP methods. Defaults to ``["GET"]``; GET implies HEAD.
            name: Optional route name, shown by ``spaserve routes``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[Handler], Handler]:
        """Register an error handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline.

        User middleware runs inside the built-in security headers and
        compression layers and outside the SPA fallback.
        """
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown,
        after the server stops accepting new requests.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Compiled state --

    @property
    def store(self) -> AssetStore:
        return self._store

    @property
    def router(self) -> Router:
        """The compiled endpoint router (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    @property
    def route_table(self) -> RouteTable:
        """The compiled shell route table (freezes the app)."""
        self._ensure_frozen()
        assert self._routes is not None
        return self._routes

    @property
    def reserved(self) -> RouteTable:
        """Patterns the SPA fallback never answers for (freezes the app)."""
        self._ensure_frozen()
        assert self._reserved is not None
        return self._reserved

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server (dev or production based on config.debug).

        Validates the asset store and compiles the route tables first, so
        a missing build directory fails before any socket is opened.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port or self.config.port

        if self.config.debug:
            from spaserve.server.launch import run_dev_server

            run_dev_server(
                self,
                _host,
                _port,
                reload=self.config.debug,
                reload_include=self.config.reload_include,
                reload_dirs=self.config.reload_dirs,
            )
        else:
            from spaserve.server.launch import run_production_server

            run_production_server(self, host=_host, port=_port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
            security=self._security,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server. A missing build directory fails startup.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        await invoke(hook)
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.error("Startup failed: %s", exc)
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                logger.info("Shutting down, in-flight requests drained")
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock. Raises
        ``ConfigurationError`` if the store cannot serve the shell or a
        route pattern is invalid; the app stays unfrozen in that case.
        """
        config = self.config

        # 1. The build output must be there before anything is served
        self._store.validate()

        # 2. Endpoint router: operational endpoints first, then the app's
        router = Router()
        router.add(Route(config.health_path, make_health_endpoint(config), _methods(None), "health"))
        routes = RouteTable(config.routes)
        if config.introspection_enabled:
            introspect = make_introspection_endpoint(self._store, routes, config)
            router.add(Route(config.introspection_path, introspect, _methods(None), "introspection"))
        for pending in self._pending_routes:
            router.add(Route(pending.path, pending.handler, _methods(pending.methods), pending.name))
        router.compile()

        reserved = RouteTable(route.path for route in router.routes)

        # 3. Middleware: built-in outer layers, user middleware, then the fallback
        fallback = SPAFallback(
            self._store,
            routes=routes,
            reserved=reserved,
            policy=FallbackPolicy.from_config(config),
        )
        middleware_list: list[Callable[..., Any]] = []
        security: SecurityHeadersConfig | None = None
        if config.security_headers:
            security = SecurityHeadersConfig(
                content_security_policy=config.content_security_policy,
                strict_transport_security=config.strict_transport_security,
            )
            middleware_list.append(SecurityHeadersMiddleware(security))
        if config.compression:
            middleware_list.append(
                CompressionMiddleware(CompressionConfig(min_size=config.compression_min_size))
            )
        middleware_list.extend(self._middleware_list)
        middleware_list.append(fallback)

        self._router = router
        self._routes = routes
        self._reserved = reserved
        self._middleware = tuple(middleware_list)
        self._security = security
        self._frozen = True

        logger.info(
            "Serving %s (assets under %s, %d client routes, %s routing, %s mode)",
            self._store.root,
            fallback.policy.assets_prefix or "/",
            len(routes),
            "strict" if config.strict_routes else "permissive",
            config.environment,
        )
        logger.info("Health check at http://%s:%d%s", config.host, config.port, config.health_path)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register endpoints, middleware, and error handlers before calling app.run()."
            )
            raise RuntimeError(msg)


def _methods(methods: list[str] | None) -> frozenset[str]:
    normalized = {m.upper() for m in (methods or ["GET"])}
    if "GET" in normalized:
        normalized.add("HEAD")
    return frozenset(normalized)


def create_app(config: ServerConfig | None = None) -> App:
    """App factory: ``config`` defaults to ``ServerConfig.from_env()``."""
    return App(config or ServerConfig.from_env())
