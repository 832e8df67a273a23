"""pounce launchers for development and production.

pounce is imported on first use, so the app and its tests run without
the ``server`` extra installed. Both launchers switch off pounce's own
health endpoint: the app answers ``/health`` itself, with the build
directory's state in the payload.

In production pounce owns signal handling: on SIGTERM/SIGINT it stops
accepting connections, lets in-flight responses finish, runs the ASGI
lifespan shutdown, and returns from ``run()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from spaserve.app import App
    from spaserve.config import ServerConfig


def _serve(app: App, *, app_path: str | None = None, **settings: Any) -> None:
    from pounce.config import ServerConfig as PounceConfig
    from pounce.server import Server

    config = PounceConfig(health_check_path=None, **settings)
    if app_path is None:
        Server(config, app).run()
    else:
        # pounce reimports the app from this string on every reload
        Server(config, app, app_path=app_path).run()


def run_dev_server(
    app: App,
    host: str,
    port: int,
    *,
    reload: bool = True,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
) -> None:
    """Serve *app* on one worker, restarting when source files change.

    ``reload_include`` adds file extensions to watch and ``reload_dirs``
    adds directories beside the working directory. The log level comes
    from the app's config.
    """
    _serve(
        app,
        app_path=app_path,
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
        log_level=app.config.log_level,
    )


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 3000,
    *,
    config: ServerConfig | None = None,
    workers: int | None = None,
) -> None:
    """Serve *app* with pounce's multi-worker production settings.

    Worker count, logging, connection limits, timeouts and TLS files come
    from *config* (``app.config`` by default). ``workers`` overrides the
    configured count; 0 lets pounce size the pool from the CPU count.
    """
    settings = config or app.config
    _serve(
        app,
        host=host,
        port=port,
        workers=settings.workers if workers is None else workers,
        lifecycle_logging=settings.lifecycle_logging,
        log_format=settings.log_format,
        log_level=settings.log_level,
        max_connections=settings.max_connections,
        backlog=settings.backlog,
        keep_alive_timeout=settings.keep_alive_timeout,
        request_timeout=settings.request_timeout,
        ssl_certfile=settings.ssl_certfile,
        ssl_keyfile=settings.ssl_keyfile,
    )
